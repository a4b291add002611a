"""
Endpoint de reemplazos para un ingrediente suelto.
"""

from typing import Optional

from fastapi import APIRouter, Query

from recipe_ai_core.substitutions import get_substitutions

from ..models.requests import SubstitutionsResponse
from .recipes import split_csv

router = APIRouter(prefix="/api/substitutions", tags=["substitutions"])


@router.get("/{ingredient}", response_model=SubstitutionsResponse)
async def get_ingredient_substitutions(
    ingredient: str,
    dietary: Optional[str] = Query(default=None, description="Restricciones separadas por coma"),
):
    """
    Hasta 5 reemplazos para `ingredient` (lista vacía si no hay ninguno).
    """
    return SubstitutionsResponse(
        ingredient=ingredient,
        substitutions=get_substitutions(ingredient, split_csv(dietary)),
    )
