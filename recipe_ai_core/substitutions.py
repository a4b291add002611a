from __future__ import annotations

"""
recipe_ai_core.substitutions
============================

Sugerencias de reemplazo de ingredientes (tabla estática, sin modelo).

Reglas de búsqueda para un ingrediente:
1) Coincidencia exacta en la tabla general. Si además hay restricciones
   alimentarias con reemplazos propios para ese ingrediente, esos van primero.
2) Coincidencia parcial (uno contiene al otro) en la tabla general.
3) Coincidencia parcial en las tablas de cada restricción.

Se devuelven como máximo `MAX_SUGGESTIONS` sugerencias.
"""

from typing import Dict, List, Optional, Sequence

from .domain_models import Recipe

MAX_SUGGESTIONS = 5

SUBSTITUTION_MAP: Dict[str, List[str]] = {
    # Lácteos
    "butter": ["olive oil", "coconut oil", "margarine", "avocado"],
    "milk": ["almond milk", "soy milk", "oat milk", "coconut milk"],
    "cream": ["coconut cream", "cashew cream", "evaporated milk"],
    "cheese": ["nutritional yeast", "cashew cheese", "dairy-free cheese"],
    # Huevos
    "eggs": ["flax eggs (1 tbsp ground flaxseed + 3 tbsp water)", "chia eggs", "applesauce", "banana"],
    # Harinas
    "all-purpose flour": ["whole wheat flour", "almond flour", "coconut flour", "gluten-free flour blend"],
    "wheat flour": ["rice flour", "almond flour", "coconut flour", "oat flour"],
    # Endulzantes
    "sugar": ["honey", "maple syrup", "agave nectar", "stevia", "coconut sugar"],
    "brown sugar": ["coconut sugar", "maple syrup", "honey"],
    # Aceites
    "vegetable oil": ["olive oil", "coconut oil", "avocado oil", "canola oil"],
    "olive oil": ["vegetable oil", "coconut oil", "avocado oil"],
    # Hierbas
    "fresh basil": ["dried basil", "oregano", "thyme"],
    "fresh parsley": ["dried parsley", "cilantro", "chives"],
    "fresh cilantro": ["fresh parsley", "coriander seeds"],
    # Proteínas
    "chicken": ["tofu", "tempeh", "chickpeas", "lentils"],
    "beef": ["mushrooms", "lentils", "tempeh", "jackfruit"],
    "pork": ["chicken", "tofu", "mushrooms"],
    "fish": ["tofu", "tempeh", "chickpeas"],
    # Verduras
    "onion": ["shallots", "leeks", "scallions"],
    "garlic": ["garlic powder", "shallots"],
    "tomatoes": ["canned tomatoes", "tomato paste", "sun-dried tomatoes"],
    # Granos
    "rice": ["quinoa", "cauliflower rice", "barley", "couscous"],
    "pasta": ["zucchini noodles", "spaghetti squash", "rice noodles", "gluten-free pasta"],
    "bread": ["gluten-free bread", "lettuce wraps", "tortillas"],
}

DIETARY_SUBSTITUTIONS: Dict[str, Dict[str, List[str]]] = {
    "vegan": {
        "butter": ["coconut oil", "olive oil", "vegan margarine"],
        "milk": ["almond milk", "soy milk", "oat milk"],
        "cheese": ["nutritional yeast", "vegan cheese"],
        "eggs": ["flax eggs", "chia eggs", "applesauce"],
        "honey": ["maple syrup", "agave nectar"],
    },
    "gluten-free": {
        "flour": ["almond flour", "coconut flour", "rice flour", "gluten-free flour blend"],
        "bread": ["gluten-free bread", "rice cakes"],
        "pasta": ["rice noodles", "zucchini noodles", "gluten-free pasta"],
        "soy sauce": ["tamari", "coconut aminos"],
    },
    "keto": {
        "sugar": ["stevia", "erythritol", "monk fruit"],
        "flour": ["almond flour", "coconut flour"],
        "rice": ["cauliflower rice"],
        "pasta": ["zucchini noodles", "shirataki noodles"],
    },
    "paleo": {
        "dairy": ["coconut milk", "almond milk"],
        "grains": ["cauliflower rice", "sweet potato"],
        "legumes": ["nuts", "seeds"],
    },
}


def _partial_match(name: str, table: Dict[str, List[str]]) -> Optional[List[str]]:
    for key, subs in table.items():
        if key in name or name in key:
            return subs
    return None


def get_substitutions(
    ingredient_name: str,
    dietary_restrictions: Optional[Sequence[str]] = None,
) -> List[str]:
    """
    Sugerencias para un ingrediente (lista vacía si no hay ninguna).

    >>> get_substitutions("Butter", ["vegan"])[:2]
    ['coconut oil', 'olive oil']
    """
    name = (ingredient_name or "").strip().lower()
    if not name:
        return []
    restrictions = [r.strip().lower() for r in dietary_restrictions or [] if r.strip()]

    if name in SUBSTITUTION_MAP:
        subs = list(SUBSTITUTION_MAP[name])
        for restriction in restrictions:
            preferred = DIETARY_SUBSTITUTIONS.get(restriction, {}).get(name)
            if preferred:
                subs = preferred + [s for s in subs if s not in preferred]
        return subs[:MAX_SUGGESTIONS]

    subs = _partial_match(name, SUBSTITUTION_MAP)
    if subs:
        return subs[:MAX_SUGGESTIONS]

    for restriction in restrictions:
        subs = _partial_match(name, DIETARY_SUBSTITUTIONS.get(restriction, {}))
        if subs:
            return subs[:MAX_SUGGESTIONS]

    return []


def get_recipe_substitutions(
    recipe: Recipe,
    dietary_restrictions: Optional[Sequence[str]] = None,
) -> Dict[str, List[str]]:
    """Sugerencias para cada ingrediente de la receta que tenga alguna."""
    out: Dict[str, List[str]] = {}
    for line in recipe.ingredients:
        subs = get_substitutions(line.item, dietary_restrictions)
        if subs:
            out[line.item] = subs
    return out
