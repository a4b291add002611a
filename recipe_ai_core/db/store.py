"""
Implementación SQLAlchemy del `RecipeStore`.

Funciones de lectura/escritura de recetas persistidas:
- Búsqueda exacta por conjuntos de ids (la cache del orquestador)
- Alta de recetas generadas
- Consulta por id y por "comparte alguna cocina/ingrediente" (recomendaciones)

Todas las operaciones abren su propia sesión: commit al terminar sin errores,
rollback ante cualquier excepción. Los errores de SQLAlchemy se reportan como
`PersistenceError`.
"""

from __future__ import annotations

import json
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..domain_models import IngredientLine, Recipe, cache_key
from .database import guarded_session
from .models import RecipeRecord


def _sorted_unique(values: Iterable[str]) -> List[str]:
    return sorted({str(v).strip() for v in values if str(v).strip()})


def _json_member(column, value: str):
    """`column LIKE '%"value"%'` con los comodines de `value` escapados."""
    token = json.dumps(value)
    token = token.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.like(f"%{token}%", escape="\\")


def record_to_recipe(record: RecipeRecord) -> Recipe:
    """Convierte una fila ORM en el modelo de dominio."""
    ingredients = [
        IngredientLine(amount=str(i.get("amount", "")), item=str(i.get("item", "")))
        for i in json.loads(record.ingredients_json or "[]")
    ]
    return Recipe(
        id=record.id,
        name=record.name,
        description=record.description,
        cuisine=record.cuisine,
        prep_time=record.prep_time,
        cook_time=record.cook_time,
        servings=record.servings,
        difficulty=record.difficulty,  # type: ignore[arg-type]
        ingredients=ingredients,
        instructions=json.loads(record.instructions_json or "[]"),
        tips=json.loads(record.tips_json or "[]"),
        cuisine_ids=json.loads(record.cuisine_ids_json or "[]"),
        ingredient_ids=json.loads(record.ingredient_ids_json or "[]"),
        dietary_restrictions=json.loads(record.dietary_json or "[]"),
        provenance=record.provenance,  # type: ignore[arg-type]
        model=record.model,
        created_at=record.created_at,
    )


class SqlAlchemyRecipeStore:
    """
    Store de recetas sobre SQLAlchemy.

    Args:
        session_factory: sessionmaker a usar. Si es None se usa la base global
            (`DATABASE_URL`) vía `get_db_session()`.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory

    def find_by_exact_id_sets(
        self,
        cuisine_ids: Iterable[str],
        ingredient_ids: Iterable[str],
        dietary_restrictions: Iterable[str] = (),
    ) -> List[Recipe]:
        """
        Recetas para exactamente estos conjuntos, de la más reciente a la más
        antigua (empate en `created_at` → id mayor primero).
        """
        key = cache_key(cuisine_ids, ingredient_ids, dietary_restrictions)
        stmt = (
            select(RecipeRecord)
            .where(RecipeRecord.cache_key == key)
            .order_by(RecipeRecord.created_at.desc(), RecipeRecord.id.desc())
        )
        with guarded_session(self._session_factory) as session:
            return [record_to_recipe(r) for r in session.execute(stmt).scalars().all()]

    def save(
        self,
        recipe: Recipe,
        cuisine_ids: Sequence[str],
        ingredient_ids: Sequence[str],
        provenance: str,
        model: str,
        dietary_restrictions: Sequence[str] = (),
    ) -> Recipe:
        cuisines = _sorted_unique(cuisine_ids)
        ingredients = _sorted_unique(ingredient_ids)
        dietary = _sorted_unique(r.lower() for r in dietary_restrictions)

        record = RecipeRecord(
            name=recipe.name,
            description=recipe.description,
            cuisine=recipe.cuisine,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            servings=recipe.servings,
            difficulty=recipe.difficulty,
            ingredients_json=json.dumps(
                [{"amount": i.amount, "item": i.item} for i in recipe.ingredients]
            ),
            instructions_json=json.dumps(list(recipe.instructions)),
            tips_json=json.dumps(list(recipe.tips)),
            cuisine_ids_json=json.dumps(cuisines),
            ingredient_ids_json=json.dumps(ingredients),
            dietary_json=json.dumps(dietary),
            cache_key=cache_key(cuisines, ingredients, dietary),
            provenance=provenance,
            model=model,
        )

        with guarded_session(self._session_factory) as session:
            session.add(record)
            session.flush()  # Para obtener id y created_at
            saved_id, created_at = record.id, record.created_at

        return replace(
            recipe,
            id=saved_id,
            cuisine_ids=cuisines,
            ingredient_ids=ingredients,
            dietary_restrictions=dietary,
            provenance=provenance,  # type: ignore[arg-type]
            model=model,
            created_at=created_at,
        )

    def get(self, recipe_id: int) -> Optional[Recipe]:
        with guarded_session(self._session_factory) as session:
            record = session.get(RecipeRecord, recipe_id)
            return record_to_recipe(record) if record is not None else None

    def list_recent(self, limit: int = 20) -> List[Recipe]:
        stmt = (
            select(RecipeRecord)
            .order_by(RecipeRecord.created_at.desc(), RecipeRecord.id.desc())
            .limit(limit)
        )
        with guarded_session(self._session_factory) as session:
            return [record_to_recipe(r) for r in session.execute(stmt).scalars().all()]

    def find_sharing_any(
        self,
        cuisine_ids: Iterable[str],
        ingredient_ids: Iterable[str],
        exclude_id: Optional[int] = None,
        limit: int = 10,
    ) -> List[Recipe]:
        """
        Recetas (más recientes primero) que comparten al menos una cocina o un
        ingrediente con los conjuntos dados.

        La base filtra con LIKE sobre las columnas JSON de ids, así que solo se
        decodifican las filas candidatas; la intersección exacta se confirma
        en Python (en SQLite LIKE no distingue mayúsculas).
        """
        cuisines = set(cuisine_ids)
        ingredients = set(ingredient_ids)

        conditions = [
            _json_member(RecipeRecord.cuisine_ids_json, c) for c in sorted(cuisines)
        ] + [
            _json_member(RecipeRecord.ingredient_ids_json, i) for i in sorted(ingredients)
        ]
        if not conditions:
            return []

        stmt = (
            select(RecipeRecord)
            .where(or_(*conditions))
            .order_by(RecipeRecord.created_at.desc(), RecipeRecord.id.desc())
        )
        if exclude_id is not None:
            stmt = stmt.where(RecipeRecord.id != exclude_id)

        out: List[Recipe] = []
        with guarded_session(self._session_factory) as session:
            for record in session.execute(stmt).scalars():
                candidate = record_to_recipe(record)
                if cuisines & set(candidate.cuisine_ids) or ingredients & set(candidate.ingredient_ids):
                    out.append(candidate)
                    if len(out) >= limit:
                        break
        return out
