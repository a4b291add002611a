"""
Normalizador: `FlattenedRecipe` → `Recipe`.

Repara listas paralelas de distinto largo rellenando la más corta
(cantidad faltante → "to taste", ingrediente faltante → ""). Es la única
tolerancia deliberada del pipeline: preferimos una receta con un renglón
incompleto antes que descartar una receta buena por un desfasaje de un elemento.
"""

from __future__ import annotations

import logging
from typing import List

from .domain_models import (
    DEFAULT_AMOUNT,
    DEFAULT_DIFFICULTY,
    DEFAULT_ITEM,
    DEFAULT_SERVINGS,
    DIFFICULTIES,
    FlattenedRecipe,
    IngredientLine,
    Recipe,
)

logger = logging.getLogger(__name__)


def pad_parallel(amounts: List[str], items: List[str]) -> tuple[List[str], List[str]]:
    """Devuelve copias de ambas listas con el mismo largo (el máximo de las dos)."""
    size = max(len(amounts), len(items))
    padded_amounts = list(amounts) + [DEFAULT_AMOUNT] * (size - len(amounts))
    padded_items = list(items) + [DEFAULT_ITEM] * (size - len(items))
    return padded_amounts, padded_items


def coerce_difficulty(value: str) -> str:
    """
    "easy" → "Easy", "HARD" → "Hard". Cualquier otro valor → "Medium".
    """
    cleaned = (value or "").strip().lower()
    for option in DIFFICULTIES:
        if option.lower() == cleaned:
            return option
    return DEFAULT_DIFFICULTY


def normalize_recipe(flat: FlattenedRecipe) -> Recipe:
    """
    Convierte la receta aplanada a la forma canónica.

    Los escalares pasan tal cual, salvo `difficulty` (se lleva al enum
    Easy/Medium/Hard) y `servings` (mínimo 1).
    """
    amounts, items = flat.ingredient_amounts, flat.ingredient_items
    if len(amounts) != len(items):
        logger.warning(
            f"Listas de ingredientes desparejas en '{flat.name}': "
            f"{len(amounts)} cantidades vs {len(items)} ingredientes; se rellenan"
        )
        amounts, items = pad_parallel(amounts, items)

    ingredients = [
        IngredientLine(amount=amount, item=item)
        for amount, item in zip(amounts, items)
    ]

    return Recipe(
        name=flat.name,
        description=flat.description,
        cuisine=flat.cuisine,
        prep_time=flat.prep_time,
        cook_time=flat.cook_time,
        servings=flat.servings if flat.servings >= 1 else DEFAULT_SERVINGS,
        difficulty=coerce_difficulty(flat.difficulty),  # type: ignore[arg-type]
        ingredients=ingredients,
        instructions=list(flat.instructions),
        tips=list(flat.tips),
    )
