from __future__ import annotations

"""
Carga (o actualiza) el catálogo de cocinas e ingredientes.

Idempotente: si un id ya existe se actualizan nombre/descr./categoría.

Uso:
    python tools/seed_catalogs.py
"""

from typing import Type

from recipe_ai_core.db.database import get_db_session, init_db
from recipe_ai_core.db.models import CuisineRecord, IngredientRecord


CUISINES = [
    dict(id="italian", name="Italian", description="Pasta, pizza, and Mediterranean flavors", sort_order=10),
    dict(id="mexican", name="Mexican", description="Tacos, burritos, and spicy delights", sort_order=20),
    dict(id="chinese", name="Chinese", description="Stir-fries, noodles, and bold flavors", sort_order=30),
    dict(id="japanese", name="Japanese", description="Sushi, ramen, and umami richness", sort_order=40),
    dict(id="indian", name="Indian", description="Curries, spices, and aromatic dishes", sort_order=50),
    dict(id="thai", name="Thai", description="Sweet, sour, and spicy combinations", sort_order=60),
    dict(id="mediterranean", name="Mediterranean", description="Fresh, healthy, and vibrant flavors", sort_order=70),
    dict(id="french", name="French", description="Elegant techniques and rich sauces", sort_order=80),
]


def _ingredients(category: str, *names: str) -> list[dict]:
    return [
        dict(id=name.lower().replace(" ", "-"), name=name, category=category)
        for name in names
    ]


INGREDIENTS = [
    # =========================================================
    # Proteínas
    # =========================================================
    *_ingredients("protein", "Chicken", "Beef", "Pork", "Salmon", "Shrimp", "Tofu", "Eggs", "Chickpeas", "Lentils"),
    # =========================================================
    # Verduras
    # =========================================================
    *_ingredients("vegetable", "Tomato", "Onion", "Garlic", "Bell Pepper", "Spinach", "Mushrooms", "Zucchini", "Eggplant", "Carrot", "Avocado"),
    # =========================================================
    # Granos y harinas
    # =========================================================
    *_ingredients("grain", "Rice", "Pasta", "Noodles", "Bread", "Tortillas", "Quinoa"),
    # =========================================================
    # Lácteos
    # =========================================================
    *_ingredients("dairy", "Cheese", "Butter", "Milk", "Cream", "Yogurt"),
    # =========================================================
    # Hierbas y especias
    # =========================================================
    *_ingredients("herb", "Basil", "Cilantro", "Parsley", "Mint", "Thyme"),
    *_ingredients("spice", "Cumin", "Chili", "Ginger", "Turmeric", "Paprika", "Curry Powder"),
    # =========================================================
    # Otros
    # =========================================================
    *_ingredients("pantry", "Olive Oil", "Soy Sauce", "Coconut Milk", "Lime", "Lemon", "Honey"),
]


def upsert(session, model: Type[CuisineRecord] | Type[IngredientRecord], row: dict) -> None:
    existing = session.get(model, row["id"])
    if existing:
        for key, value in row.items():
            setattr(existing, key, value)
    else:
        session.add(model(**row))


def main():
    init_db()

    with get_db_session() as session:
        for row in CUISINES:
            upsert(session, CuisineRecord, row)
        for row in INGREDIENTS:
            upsert(session, IngredientRecord, row)

    print(f"✅ Catálogos seed cargados/actualizados: {len(CUISINES)} cocinas, {len(INGREDIENTS)} ingredientes.")


if __name__ == "__main__":
    main()
