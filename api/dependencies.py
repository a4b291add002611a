"""
Dependencias de FastAPI.

Proveen las instancias compartidas del motor (generador, store, resolver).
Son singletons por proceso: el generador tiene que ser uno solo para que el
lock por combinación de cocinas/ingredientes sirva entre requests.

En tests se reemplazan con `app.dependency_overrides`.
"""

import logging
from functools import lru_cache

from recipe_ai_core.db.store import SqlAlchemyRecipeStore
from recipe_ai_core.engine import RecipeGenerator, build_default_generator
from recipe_ai_core.errors import GenerationError
from recipe_ai_core.names import CatalogNameResolver

logger = logging.getLogger(__name__)


@lru_cache
def _default_generator() -> RecipeGenerator:
    return build_default_generator()


def get_generator() -> RecipeGenerator:
    """
    Orquestador de generación (OpenAI + catálogo + base global).

    Raises:
        GenerationError: si el cliente de OpenAI no se puede construir
            (ej: falta OPENAI_API_KEY).
    """
    try:
        return _default_generator()
    except RuntimeError as e:
        logger.error(f"No se pudo inicializar el generador: {e}")
        raise GenerationError(str(e)) from e


@lru_cache
def get_store() -> SqlAlchemyRecipeStore:
    return SqlAlchemyRecipeStore()


@lru_cache
def get_resolver() -> CatalogNameResolver:
    return CatalogNameResolver()
