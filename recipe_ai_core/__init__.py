"""
recipe_ai_core
==============

Motor de generación de recetas con IA: prompt → modelo → parser →
normalizador → persistencia, con cache por combinación de cocinas e
ingredientes.
"""

from .domain_models import GenerationResult, IngredientLine, Recipe
from .engine import GeneratorDeps, RecipeGenerator, build_default_generator
from .errors import (
    GenerationError,
    ParseError,
    PersistenceError,
    RecipeAIError,
    TransportError,
    ValidationError,
)

__all__ = [
    "GenerationError",
    "GenerationResult",
    "GeneratorDeps",
    "IngredientLine",
    "ParseError",
    "PersistenceError",
    "Recipe",
    "RecipeAIError",
    "RecipeGenerator",
    "TransportError",
    "ValidationError",
    "build_default_generator",
]
