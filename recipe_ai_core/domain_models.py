from __future__ import annotations

"""
recipe_ai_core.domain_models
============================

Modelos de dominio (dataclasses) usados a lo largo del pipeline de generación.

- `FlattenedRecipe`: forma intermedia que devuelve el parser. Usa dos listas
  paralelas (`ingredient_amounts`, `ingredient_items`) en vez de una lista de
  objetos, porque es lo que le pedimos al modelo (más barato en tokens).
  Vive solo entre el parser y el normalizador; nunca se persiste.
- `Recipe`: receta canónica, la que se persiste y se devuelve a la UI.
- `GenerationResult`: receta + flag `cached` (hit de cache vs. generación nueva).

Principios de diseño
--------------------
- Dataclasses sin lógica pesada: este módulo NO habla con OpenAI, DB, ni IO.
- `cache_key()` es la única función "de negocio" acá porque la usan tanto el
  store como el orquestador y tiene que ser idéntica en ambos lados.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Literal, Optional


# ============================================================
# Tipos base
# ============================================================

Difficulty = Literal["Easy", "Medium", "Hard"]
DIFFICULTIES: tuple[str, ...] = ("Easy", "Medium", "Hard")

Provenance = Literal["ai", "custom"]
"""
Origen de la receta:
- ai: generada por el pipeline (modelo de lenguaje)
- custom: escrita por una persona
"""

# Defaults compartidos por el parser (ambos formatos) y el normalizador
DEFAULT_DESCRIPTION = "A delicious recipe created by AI"
DEFAULT_PREP_TIME = "15"
DEFAULT_COOK_TIME = "20"
DEFAULT_SERVINGS = 4
DEFAULT_DIFFICULTY: Difficulty = "Medium"
DEFAULT_AMOUNT = "to taste"
DEFAULT_ITEM = ""


# ============================================================
# Recetas
# ============================================================

@dataclass
class IngredientLine:
    """Un renglón de la lista de ingredientes: cantidad + ingrediente."""
    amount: str
    item: str


@dataclass
class FlattenedRecipe:
    """
    Receta "aplanada" tal como la devuelve el parser.

    `ingredient_amounts` e `ingredient_items` son paralelas, pero el parser NO
    garantiza que tengan el mismo largo: eso lo repara el normalizador.
    """
    name: str
    description: str
    cuisine: str
    prep_time: str = DEFAULT_PREP_TIME
    cook_time: str = DEFAULT_COOK_TIME
    servings: int = DEFAULT_SERVINGS
    difficulty: str = DEFAULT_DIFFICULTY
    ingredient_amounts: List[str] = field(default_factory=list)
    ingredient_items: List[str] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)


@dataclass
class Recipe:
    """
    Receta canónica.

    Los campos de identidad (`cuisine_ids`, `ingredient_ids`,
    `dietary_restrictions`) son los que se usaron para generarla y forman la
    clave de cache. Se guardan ordenados, pero se comparan como conjuntos.

    `prep_time` / `cook_time` son texto (minutos, a veces con unidad) porque el
    modelo no siempre devuelve un número limpio.
    """
    name: str
    description: str
    cuisine: str
    prep_time: str
    cook_time: str
    servings: int
    difficulty: Difficulty
    ingredients: List[IngredientLine] = field(default_factory=list)
    instructions: List[str] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)

    # Identidad / trazabilidad (se completan al persistir)
    id: Optional[int] = None
    cuisine_ids: List[str] = field(default_factory=list)
    ingredient_ids: List[str] = field(default_factory=list)
    dietary_restrictions: List[str] = field(default_factory=list)
    provenance: Provenance = "ai"
    model: str = ""
    created_at: Optional[datetime] = None


@dataclass
class GenerationResult:
    """Resultado de `RecipeGenerator.generate`."""
    recipe: Recipe
    cached: bool


# ============================================================
# Clave de cache
# ============================================================

def _canonical(values: Iterable[str]) -> List[str]:
    return sorted({str(v).strip() for v in values if str(v).strip()})


def cache_key(
    cuisine_ids: Iterable[str],
    ingredient_ids: Iterable[str],
    dietary_restrictions: Iterable[str] = (),
) -> str:
    """
    Representación canónica (independiente del orden) de una request.

    Se usa JSON de listas ordenadas y sin duplicados para que no haya
    ambigüedad aunque un id contenga comas o separadores.

    >>> cache_key(["thai", "indian"], ["rice"]) == cache_key(["indian", "thai"], ["rice"])
    True
    """
    return json.dumps(
        [
            _canonical(cuisine_ids),
            _canonical(ingredient_ids),
            _canonical(r.lower() for r in dietary_restrictions),
        ],
        separators=(",", ":"),
    )
