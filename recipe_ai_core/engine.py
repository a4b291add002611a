from __future__ import annotations

"""
recipe_ai_core.engine
=====================

Orquestador de alto nivel de la generación de recetas.

Flujo de `RecipeGenerator.generate`:
-----------------------------------
1) Validación: al menos una cocina y un ingrediente (`ValidationError`).
2) Cache: se buscan recetas guardadas con exactamente los mismos conjuntos de
   ids (sin importar el orden). Si hay y no se fuerza la regeneración, se
   devuelve la más reciente con `cached=True` y NO se llama al modelo.
   La cache no expira ni desaloja: a lo sumo una generación por combinación,
   salvo regeneraciones forzadas.
3) Regeneración forzada: los nombres de las recetas existentes para la misma
   combinación se pasan como "avoid-list" al prompt.
4) ids → nombres (resolver), prompt, llamada al modelo, parse y normalización.
5) Persistencia con provenance="ai" y el modelo usado; `cached=False`.
6) Cualquier error en 4–5 sale como `GenerationError` (o subclase). No hay
   reintentos automáticos ni persistencia parcial.

Concurrencia
------------
El parse/normalización es sincrónico y sin estado compartido. Lo único
compartido es el mapa de locks por clave: con `lock_same_key=True` dos
requests simultáneas para la misma combinación se serializan dentro del
proceso y la segunda ve la receta guardada por la primera como hit de cache.
Entre procesos distintos no hay exclusión.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

from .config import get_settings
from .core.abstractions import GenerationClient, NameResolver, RecipeStore
from .domain_models import GenerationResult, Recipe, cache_key
from .errors import GenerationError, ValidationError
from .normalizer import normalize_recipe
from .parser import DEFAULT_CUISINE, parse_recipe_response
from .prompts import build_recipe_prompt, get_recipe_system_prompt

logger = logging.getLogger(__name__)

PROVENANCE_AI = "ai"


@dataclass
class GeneratorDeps:
    """
    Dependencias del orquestador, inyectadas una sola vez al construirlo.

    Attributes
    ----------
    client:
        Generation Client (texto crudo del modelo).
    resolver:
        Resolver de ids → nombres visibles.
    store:
        Persistencia de recetas (cache + catálogo).
    default_model:
        Modelo a usar cuando la request no indica uno.
    avoid_list_limit:
        Tope de nombres en la avoid-list al regenerar (None = sin tope).
    lock_same_key:
        Serializar generaciones concurrentes para la misma clave.
    """
    client: GenerationClient
    resolver: NameResolver
    store: RecipeStore
    default_model: str = "gpt-4o-mini"
    avoid_list_limit: Optional[int] = None
    lock_same_key: bool = True


@dataclass
class _KeyLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


def _clean_ids(ids: Optional[Sequence[str]]) -> List[str]:
    """Quita vacíos y duplicados preservando el orden (el orden importa para el prompt)."""
    seen: set[str] = set()
    out: List[str] = []
    for raw in ids or []:
        value = str(raw).strip()
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


def validate_selection(
    cuisine_ids: Optional[Sequence[str]], ingredient_ids: Optional[Sequence[str]]
) -> tuple[List[str], List[str]]:
    """
    Limpia las listas de ids y exige al menos una cocina y un ingrediente.

    Raises:
        ValidationError: alguna de las dos listas queda vacía.
    """
    cuisines = _clean_ids(cuisine_ids)
    ingredients = _clean_ids(ingredient_ids)
    if not cuisines:
        raise ValidationError("At least one cuisine must be selected")
    if not ingredients:
        raise ValidationError("At least one ingredient must be selected")
    return cuisines, ingredients


def _unique_names(recipes: Sequence[Recipe]) -> List[str]:
    names: List[str] = []
    for r in recipes:
        if r.name and r.name not in names:
            names.append(r.name)
    return names


class RecipeGenerator:
    """
    Generation Orchestrator.

    Es dueño del ciclo de vida de una request de generación (una receta o un
    error) y el único que decide entre hit de cache y regeneración.
    """

    def __init__(self, deps: GeneratorDeps):
        self._deps = deps
        self._locks: Dict[str, _KeyLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _key_lock(self, key: str) -> Iterator[None]:
        if not self._deps.lock_same_key:
            yield
            return

        with self._locks_guard:
            entry = self._locks.setdefault(key, _KeyLock())
            entry.holders += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.holders -= 1
                if entry.holders == 0:
                    self._locks.pop(key, None)

    def _avoid_list(self, existing: Sequence[Recipe]) -> List[str]:
        names = _unique_names(existing)
        limit = self._deps.avoid_list_limit
        if limit is not None and len(names) > limit:
            logger.warning(
                f"Avoid-list con {len(names)} nombres; se envían los {limit} más recientes"
            )
            names = names[:limit]
        return names

    def generate(
        self,
        cuisine_ids: Sequence[str],
        ingredient_ids: Sequence[str],
        force_regenerate: bool = False,
        dietary_restrictions: Optional[Sequence[str]] = None,
        model: Optional[str] = None,
    ) -> GenerationResult:
        """
        Devuelve una receta para la combinación pedida (cacheada o nueva).

        Args:
            cuisine_ids: ids de cocinas (al menos uno).
            ingredient_ids: ids de ingredientes (al menos uno).
            force_regenerate: Ignora la cache y pide una receta distinta a las
                existentes para la misma combinación.
            dietary_restrictions: Etiquetas tipo "vegan", "gluten-free". Forman
                parte de la clave de cache.
            model: Modelo a usar; default `deps.default_model`.

        Raises:
            ValidationError: lista de cocinas o ingredientes vacía.
            PersistenceError: falla leyendo la cache.
            GenerationError: falla en la generación (o subclase: ParseError,
                TransportError, PersistenceError).
        """
        cuisines, ingredients = validate_selection(cuisine_ids, ingredient_ids)
        # La clave de cache ya las compara en minúsculas
        dietary = _clean_ids([str(r).lower() for r in dietary_restrictions or []])

        model_name = model or self._deps.default_model
        key = cache_key(cuisines, ingredients, dietary)

        with self._key_lock(key):
            existing = self._deps.store.find_by_exact_id_sets(cuisines, ingredients, dietary)

            if existing and not force_regenerate:
                recipe = existing[0]
                logger.info(f"Cache hit para {key}: receta {recipe.id} '{recipe.name}'")
                return GenerationResult(recipe=recipe, cached=True)

            avoid = self._avoid_list(existing) if force_regenerate else []
            logger.info(
                f"Generando receta para {key} con {model_name} "
                f"(forzada={force_regenerate}, avoid-list={len(avoid)})"
            )

            try:
                saved = self._generate_and_save(cuisines, ingredients, dietary, avoid, model_name)
            except GenerationError as e:
                logger.error(f"Falló la generación para {key}: {e}")
                raise
            except Exception as e:
                logger.error(f"Error inesperado generando {key}: {type(e).__name__}: {e}")
                raise GenerationError(f"Failed to generate recipe: {e}") from e

        logger.info(f"Receta {saved.id} '{saved.name}' guardada para {key}")
        return GenerationResult(recipe=saved, cached=False)

    def _generate_and_save(
        self,
        cuisines: List[str],
        ingredients: List[str],
        dietary: List[str],
        avoid: List[str],
        model_name: str,
    ) -> Recipe:
        resolver = self._deps.resolver
        cuisine_names = resolver.resolve_cuisine_names(cuisines)
        ingredient_names = resolver.resolve_ingredient_names(ingredients)

        prompt = build_recipe_prompt(
            cuisine_names,
            ingredient_names,
            avoid_similar_to=avoid,
            dietary_restrictions=dietary,
        )
        raw = self._deps.client.complete(get_recipe_system_prompt(), prompt, model_name)

        flat = parse_recipe_response(
            raw,
            fallback_cuisine=cuisine_names[0] if cuisine_names else DEFAULT_CUISINE,
        )
        recipe = normalize_recipe(flat)

        return self._deps.store.save(
            recipe,
            cuisines,
            ingredients,
            provenance=PROVENANCE_AI,
            model=model_name,
            dietary_restrictions=dietary,
        )


def build_default_generator() -> RecipeGenerator:
    """
    Arma el orquestador de producción: OpenAI + catálogo + store SQLAlchemy
    sobre la base global (`DATABASE_URL`), con valores de `Settings`.
    """
    from .db.store import SqlAlchemyRecipeStore
    from .llm_client import OpenAIGenerationClient
    from .names import CatalogNameResolver

    settings = get_settings()
    return RecipeGenerator(
        GeneratorDeps(
            client=OpenAIGenerationClient(),
            resolver=CatalogNameResolver(),
            store=SqlAlchemyRecipeStore(),
            default_model=settings.openai_model_text,
            avoid_list_limit=settings.avoid_list_limit,
            lock_same_key=settings.lock_same_key,
        )
    )
