"""
Abstracciones (Protocols) de los colaboradores del orquestador.

El orquestador (`recipe_ai_core.engine.RecipeGenerator`) no conoce OpenAI,
SQLAlchemy ni el catálogo: recibe implementaciones de estas interfaces al
construirse. En producción se usan:

- `llm_client.OpenAIGenerationClient`  → GenerationClient
- `names.CatalogNameResolver`          → NameResolver
- `db.store.SqlAlchemyRecipeStore`     → RecipeStore

En tests se reemplazan por fakes en memoria.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence

from ..domain_models import Recipe


class GenerationClient(Protocol):
    """
    Cliente del modelo de lenguaje.
    """

    def complete(self, system_prompt: str, user_prompt: str, model: str) -> str:
        """
        Devuelve el texto crudo de la respuesta.

        Raises:
            TransportError: error de red, cuota o respuesta vacía.
        """
        ...


class NameResolver(Protocol):
    """
    Traduce ids opacos a nombres visibles para armar el prompt.

    Ambos métodos preservan el orden y devuelven el id tal cual si no hay
    nombre registrado.
    """

    def resolve_cuisine_names(self, ids: Sequence[str]) -> List[str]:
        ...

    def resolve_ingredient_names(self, ids: Sequence[str]) -> List[str]:
        ...


class RecipeStore(Protocol):
    """
    Persistencia de recetas generadas (cache + catálogo).
    """

    def find_by_exact_id_sets(
        self,
        cuisine_ids: Iterable[str],
        ingredient_ids: Iterable[str],
        dietary_restrictions: Iterable[str] = (),
    ) -> List[Recipe]:
        """
        Recetas cuyos conjuntos de ids coinciden exactamente (sin importar el
        orden), de la más reciente a la más antigua.
        """
        ...

    def save(
        self,
        recipe: Recipe,
        cuisine_ids: Sequence[str],
        ingredient_ids: Sequence[str],
        provenance: str,
        model: str,
        dietary_restrictions: Sequence[str] = (),
    ) -> Recipe:
        """
        Persiste la receta y devuelve una copia con `id` y `created_at` asignados.
        """
        ...

    def get(self, recipe_id: int) -> Optional[Recipe]:
        ...
