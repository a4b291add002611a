"""
Endpoints del catálogo de opciones seleccionables.

Devuelven las cocinas y los ingredientes cargados en la base (ver
`tools/seed_catalogs.py`). Los ids son los que después se mandan a
POST /api/recipes/generate.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from recipe_ai_core.names import CatalogNameResolver

from ..dependencies import get_resolver
from ..models.requests import CuisineListResponse, IngredientListResponse

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/cuisines", response_model=CuisineListResponse)
def list_cuisines(resolver: CatalogNameResolver = Depends(get_resolver)):
    """
    Lista todas las cocinas, en el orden de `sort_order` y luego por nombre.
    """
    return CuisineListResponse(data=resolver.list_cuisines())


@router.get("/ingredients", response_model=IngredientListResponse)
def list_ingredients(
    category: Optional[str] = Query(default=None, description="Filtrar por categoría (ej: protein)"),
    resolver: CatalogNameResolver = Depends(get_resolver),
):
    """
    Lista los ingredientes, opcionalmente filtrados por categoría.
    """
    return IngredientListResponse(data=resolver.list_ingredients(category))
