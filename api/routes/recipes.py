"""
Endpoints de recetas.

- POST /api/recipes/generate        genera (o recupera de la cache) una receta
- GET  /api/recipes/{id}            receta guardada
- GET  /api/recipes/{id}/similar    recetas parecidas
- GET  /api/recipes/{id}/substitutions  reemplazos por ingrediente

Los errores del motor (`RecipeAIError`) los traduce a JSON el handler
registrado en `api.main`; acá solo se resuelven los 404.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from recipe_ai_core.db.store import SqlAlchemyRecipeStore
from recipe_ai_core.engine import RecipeGenerator
from recipe_ai_core.recommendations import similar_recipes
from recipe_ai_core.substitutions import get_recipe_substitutions

from ..dependencies import get_generator, get_store
from ..models.requests import (
    ErrorResponse,
    GenerateRecipeRequest,
    GenerateRecipeResponse,
    RecipeOut,
    RecipeResponse,
    RecipeSubstitutionsResponse,
    SimilarRecipesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/recipes",
    tags=["recipes"],
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)


def split_csv(raw: Optional[str]) -> list[str]:
    """'vegan, keto' -> ['vegan', 'keto']"""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.post(
    "/generate",
    response_model=GenerateRecipeResponse,
    responses={400: {"model": ErrorResponse}},
)
def generate_recipe(
    request: GenerateRecipeRequest,
    model: Optional[str] = Query(default=None, description="Modelo a usar (default: OPENAI_MODEL_TEXT)"),
    generator: RecipeGenerator = Depends(get_generator),
):
    """
    Genera una receta para las cocinas e ingredientes seleccionados.

    Si ya existe una receta para exactamente la misma combinación se devuelve
    esa (`cached: true`) salvo que se pida `forceRegenerate`.

    Es `def` (no `async def`): la generación bloquea y FastAPI la corre en su
    threadpool.
    """
    result = generator.generate(
        cuisine_ids=request.cuisines,
        ingredient_ids=request.ingredients,
        force_regenerate=request.force_regenerate,
        dietary_restrictions=request.dietary_restrictions,
        model=model,
    )
    return GenerateRecipeResponse(recipe=RecipeOut.from_domain(result.recipe), cached=result.cached)


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: int, store: SqlAlchemyRecipeStore = Depends(get_store)):
    recipe = store.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return RecipeResponse(recipe=RecipeOut.from_domain(recipe))


@router.get("/{recipe_id}/similar", response_model=SimilarRecipesResponse)
def get_similar_recipes(
    recipe_id: int,
    limit: int = Query(default=5, ge=1, le=50),
    store: SqlAlchemyRecipeStore = Depends(get_store),
):
    """Recetas que comparten cocinas o ingredientes, las de más coincidencias primero."""
    if store.get(recipe_id) is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    recipes = similar_recipes(store, recipe_id, limit=limit)
    return SimilarRecipesResponse(recommendations=[RecipeOut.from_domain(r) for r in recipes])


@router.get("/{recipe_id}/substitutions", response_model=RecipeSubstitutionsResponse)
def get_substitutions_for_recipe(
    recipe_id: int,
    dietary: Optional[str] = Query(default=None, description="Restricciones separadas por coma"),
    store: SqlAlchemyRecipeStore = Depends(get_store),
):
    recipe = store.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail=f"Recipe {recipe_id} not found")
    return RecipeSubstitutionsResponse(
        recipe_id=recipe_id,
        substitutions=get_recipe_substitutions(recipe, split_csv(dietary)),
    )
