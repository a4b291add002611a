"""
Modelos de request/response para la API.

El contrato JSON es camelCase (`forceRegenerate`, `prepTime`, ...) porque es
el que consume la UI; en Python los campos son snake_case con alias.
FastAPI serializa los `response_model` por alias.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_ai_core.domain_models import Recipe


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateRecipeRequest(CamelModel):
    """
    Request para generar (o recuperar de la cache) una receta.

    Las listas vacías NO se rechazan acá: las valida el orquestador para que
    el mensaje de error sea el mismo en la API y en la CLI.
    """

    cuisines: List[str] = Field(default_factory=list, description="ids de cocinas")
    ingredients: List[str] = Field(default_factory=list, description="ids de ingredientes")
    force_regenerate: bool = Field(
        default=False,
        alias="forceRegenerate",
        description="Ignorar la cache y pedir una receta distinta",
    )
    dietary_restrictions: List[str] = Field(
        default_factory=list,
        alias="dietaryRestrictions",
        description="Restricciones alimentarias (ej: vegan, gluten-free)",
    )

    @field_validator("cuisines", "ingredients", "dietary_restrictions", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        # `null` equivale a lista vacía: la rechaza el orquestador con su mensaje
        return [] if value is None else value


class IngredientOut(CamelModel):
    amount: str
    item: str


class RecipeOut(CamelModel):
    """Receta tal como la ve la UI."""

    id: Optional[int] = None
    name: str
    description: str
    cuisine: str
    prep_time: str = Field(alias="prepTime")
    cook_time: str = Field(alias="cookTime")
    servings: int
    difficulty: str
    ingredients: List[IngredientOut] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    cuisine_ids: List[str] = Field(default_factory=list, alias="cuisineIds")
    ingredient_ids: List[str] = Field(default_factory=list, alias="ingredientIds")
    dietary_restrictions: List[str] = Field(default_factory=list, alias="dietaryRestrictions")
    provenance: str = "ai"
    model: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @classmethod
    def from_domain(cls, recipe: Recipe) -> "RecipeOut":
        return cls(
            id=recipe.id,
            name=recipe.name,
            description=recipe.description,
            cuisine=recipe.cuisine,
            prep_time=recipe.prep_time,
            cook_time=recipe.cook_time,
            servings=recipe.servings,
            difficulty=recipe.difficulty,
            ingredients=[IngredientOut(amount=i.amount, item=i.item) for i in recipe.ingredients],
            instructions=list(recipe.instructions),
            tips=list(recipe.tips),
            cuisine_ids=list(recipe.cuisine_ids),
            ingredient_ids=list(recipe.ingredient_ids),
            dietary_restrictions=list(recipe.dietary_restrictions),
            provenance=recipe.provenance,
            model=recipe.model,
            created_at=recipe.created_at,
        )


class GenerateRecipeResponse(CamelModel):
    success: bool = True
    recipe: RecipeOut
    cached: bool


class RecipeResponse(CamelModel):
    success: bool = True
    recipe: RecipeOut


class SimilarRecipesResponse(CamelModel):
    success: bool = True
    recommendations: List[RecipeOut] = Field(default_factory=list)


class SubstitutionsResponse(CamelModel):
    """Sugerencias para un ingrediente suelto."""

    success: bool = True
    ingredient: str
    substitutions: List[str] = Field(default_factory=list)


class RecipeSubstitutionsResponse(CamelModel):
    """Sugerencias por ingrediente de una receta (solo los que tienen alguna)."""

    success: bool = True
    recipe_id: int = Field(alias="recipeId")
    substitutions: Dict[str, List[str]] = Field(default_factory=dict)


class CuisineOut(CamelModel):
    id: str
    name: str
    description: str = ""


class IngredientCatalogOut(CamelModel):
    id: str
    name: str
    category: str = ""


class CuisineListResponse(CamelModel):
    success: bool = True
    data: List[CuisineOut] = Field(default_factory=list)


class IngredientListResponse(CamelModel):
    success: bool = True
    data: List[IngredientCatalogOut] = Field(default_factory=list)


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
