from __future__ import annotations

"""
Recetas similares a una receta guardada.

Candidatas: las que comparten al menos una cocina o un ingrediente (las más
recientes, hasta el doble del límite). Puntaje: cocinas en común x2 +
ingredientes en común. Empates: se mantiene el orden por recencia.
"""

import logging
from typing import List

from .db.store import SqlAlchemyRecipeStore
from .domain_models import Recipe

logger = logging.getLogger(__name__)

CUISINE_WEIGHT = 2


def similarity_score(base: Recipe, other: Recipe) -> int:
    cuisines = len(set(base.cuisine_ids) & set(other.cuisine_ids))
    ingredients = len(set(base.ingredient_ids) & set(other.ingredient_ids))
    return cuisines * CUISINE_WEIGHT + ingredients


def similar_recipes(store: SqlAlchemyRecipeStore, recipe_id: int, limit: int = 5) -> List[Recipe]:
    """
    Devuelve hasta `limit` recetas parecidas a `recipe_id`.

    Si la receta no existe devuelve lista vacía.
    """
    base = store.get(recipe_id)
    if base is None:
        logger.info(f"Receta {recipe_id} no encontrada; sin similares")
        return []

    candidates = store.find_sharing_any(
        base.cuisine_ids,
        base.ingredient_ids,
        exclude_id=recipe_id,
        limit=limit * 2,
    )
    # sorted es estable: a igual puntaje queda primero la más reciente
    ranked = sorted(candidates, key=lambda r: similarity_score(base, r), reverse=True)
    return ranked[:limit]
