from __future__ import annotations

"""
recipe_ai_core.parser
=====================

Convierte el texto crudo devuelto por el modelo en un `FlattenedRecipe`.

Orden de intentos
-----------------
1) Formato principal (notación aplanada por líneas, ver `prompts.py`):
   - Se ignoran líneas vacías y comentarios (`#`).
   - `clave: valor` con clave de sección (`ingredientAmounts`, `ingredientItems`,
     `instructions`, `tips`) cambia la sección activa. El valor de esa línea se
     descarta: las listas se llenan solo con viñetas posteriores.
   - `clave: valor` con clave escalar conocida asigna el campo (ver `SCALAR_FIELDS`).
   - Viñeta (`-`, `*`, `1.`, `1)`) con sección activa agrega un elemento.
   - Cualquier otra línea se ignora. Una línea desconocida nunca aborta el parse.
   Al final se exige `name`, `description` y `cuisine` no vacíos.

2) Fallback JSON (solo si 1 falla): el texto completo como un objeto JSON,
   ya aplanado (`ingredientAmounts` + `ingredientItems`) o anidado
   (`ingredients: [{amount|quantity, item|name|ingredient}]`).

3) Si ninguno funciona: `ParseError`.

El parser NO repara listas de distinto largo; eso es trabajo del normalizador.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .domain_models import (
    DEFAULT_AMOUNT,
    DEFAULT_COOK_TIME,
    DEFAULT_DESCRIPTION,
    DEFAULT_DIFFICULTY,
    DEFAULT_ITEM,
    DEFAULT_PREP_TIME,
    DEFAULT_SERVINGS,
    FlattenedRecipe,
)
from .errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_RECIPE_NAME = "AI-Generated Recipe"
DEFAULT_CUISINE = "Fusion"

COMMENT_PREFIX = "#"

_BULLET_MARK = re.compile(r"^[-*]\s*")
_NUMBER_MARK = re.compile(r"^\d+[.)](?!\d)\s*")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")
_CODE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*$")


# ============================================================
# Estado del parser de líneas
# ============================================================

class Section(str, Enum):
    """Secciones de lista del formato principal."""
    INGREDIENT_AMOUNTS = "ingredientAmounts"
    INGREDIENT_ITEMS = "ingredientItems"
    INSTRUCTIONS = "instructions"
    TIPS = "tips"


SECTION_BY_KEY: Dict[str, Section] = {s.value: s for s in Section}


def parse_servings(value: Any) -> int:
    """
    Interpreta `servings` de forma tolerante: "4", "4 people", " 6 " → int.

    Si no hay un entero al comienzo, o es menor a 1, devuelve el default (4).
    """
    if isinstance(value, bool):
        return DEFAULT_SERVINGS
    if isinstance(value, int):
        return value if value >= 1 else DEFAULT_SERVINGS
    if isinstance(value, float):
        return int(value) if value >= 1 else DEFAULT_SERVINGS

    match = _LEADING_INT.match(str(value or ""))
    if not match:
        return DEFAULT_SERVINGS
    servings = int(match.group(0))
    return servings if servings >= 1 else DEFAULT_SERVINGS


def _text(value: str) -> str:
    return value.strip()


# clave del formato → (atributo del estado, conversor)
SCALAR_FIELDS: Dict[str, tuple[str, Callable[[str], Any]]] = {
    "name": ("name", _text),
    "description": ("description", _text),
    "cuisine": ("cuisine", _text),
    "prepTime": ("prep_time", _text),
    "prepTimeMinutes": ("prep_time", _text),
    "prep": ("prep_time", _text),
    "cookTime": ("cook_time", _text),
    "cookTimeMinutes": ("cook_time", _text),
    "cook": ("cook_time", _text),
    "servings": ("servings", parse_servings),
    "difficulty": ("difficulty", _text),
}


@dataclass
class _LineState:
    """Estado local de un parse (una instancia por llamada)."""
    section: Optional[Section] = None
    name: str = ""
    description: str = ""
    cuisine: str = ""
    prep_time: str = ""
    cook_time: str = ""
    servings: int = DEFAULT_SERVINGS
    difficulty: str = ""
    arrays: Dict[Section, List[str]] = field(
        default_factory=lambda: {s: [] for s in Section}
    )


def _split_key_value(line: str) -> Optional[tuple[str, str]]:
    colon = line.find(":")
    if colon <= 0:
        return None
    return line[:colon].strip(), line[colon + 1:].strip()


def _is_bullet(line: str) -> bool:
    return line.startswith(("-", "*")) or bool(_NUMBER_MARK.match(line))


def _strip_bullet(line: str) -> str:
    item = _BULLET_MARK.sub("", line, count=1)
    item = _NUMBER_MARK.sub("", item, count=1)
    return item.strip()


# ============================================================
# Formato principal
# ============================================================

def parse_line_format(text: str) -> FlattenedRecipe:
    """
    Parsea la notación aplanada por líneas.

    Raises:
        ParseError: si al final falta `name`, `description` o `cuisine`.
    """
    state = _LineState()

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        kv = _split_key_value(line)
        if kv is not None:
            key, value = kv
            section = SECTION_BY_KEY.get(key)
            if section is not None:
                state.section = section
                continue
            scalar = SCALAR_FIELDS.get(key)
            if scalar is not None:
                attr, convert = scalar
                setattr(state, attr, convert(value))
                continue

        if state.section is not None and _is_bullet(line):
            state.arrays[state.section].append(_strip_bullet(line))

    missing = [
        label
        for label, value in (
            ("name", state.name),
            ("description", state.description),
            ("cuisine", state.cuisine),
        )
        if not value
    ]
    if missing:
        raise ParseError(f"Missing required fields in TOON response: {', '.join(missing)}")

    return FlattenedRecipe(
        name=state.name,
        description=state.description,
        cuisine=state.cuisine,
        prep_time=state.prep_time or DEFAULT_PREP_TIME,
        cook_time=state.cook_time or DEFAULT_COOK_TIME,
        servings=state.servings,
        difficulty=state.difficulty or DEFAULT_DIFFICULTY,
        ingredient_amounts=state.arrays[Section.INGREDIENT_AMOUNTS],
        ingredient_items=state.arrays[Section.INGREDIENT_ITEMS],
        instructions=state.arrays[Section.INSTRUCTIONS],
        tips=state.arrays[Section.TIPS],
    )


# ============================================================
# Fallback JSON
# ============================================================

def _strip_code_fences(text: str) -> str:
    lines = text.strip().splitlines()
    if lines and _CODE_FENCE.match(lines[0]):
        lines = lines[1:]
    if lines and _CODE_FENCE.match(lines[-1]):
        lines = lines[:-1]
    return "\n".join(lines)


def _str_or(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _string_list(value: Any) -> List[str]:
    """Lista de strings desde lista o desde string separado por saltos de línea."""
    if value is None:
        return []
    if isinstance(value, str):
        return [line.strip() for line in value.split("\n") if line.strip()]
    if isinstance(value, list):
        out: List[str] = []
        for element in value:
            if isinstance(element, dict):
                element = (
                    element.get("instruction")
                    or element.get("text")
                    or element.get("step")
                    or element.get("description")
                    or ""
                )
            out.append(str(element).strip())
        return out
    return [str(value).strip()]


def _ingredient_amount(ing: Any) -> str:
    if not isinstance(ing, dict):
        return DEFAULT_AMOUNT
    amount = ing.get("amount") or ing.get("quantity")
    if amount in (None, ""):
        return DEFAULT_AMOUNT
    amount = str(amount).strip()
    unit = str(ing.get("unit") or "").strip()
    if unit and not amount.endswith(unit):
        amount = f"{amount} {unit}"
    return amount or DEFAULT_AMOUNT


def _ingredient_item(ing: Any) -> str:
    if isinstance(ing, str):
        return ing.strip()
    if not isinstance(ing, dict):
        return DEFAULT_ITEM
    return _str_or(ing.get("item") or ing.get("name") or ing.get("ingredient"), DEFAULT_ITEM)


def _looks_like_recipe(data: Dict[str, Any]) -> bool:
    return any(
        key in data
        for key in ("name", "ingredients", "ingredientAmounts", "ingredientItems", "instructions")
    )


def parse_json_format(text: str, fallback_cuisine: str = DEFAULT_CUISINE) -> FlattenedRecipe:
    """
    Parsea el texto completo como un objeto JSON (aplanado o anidado).

    Args:
        text: Respuesta cruda del modelo (se toleran code fences de Markdown).
        fallback_cuisine: Nombre visible de la primera cocina pedida, usado si
            el JSON no trae `cuisine`.

    Raises:
        ParseError: si el texto no es un objeto JSON con forma de receta.
    """
    try:
        data = json.loads(_strip_code_fences(text))
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not _looks_like_recipe(data):
        raise ParseError("JSON response does not describe a recipe")

    if "ingredientAmounts" in data and "ingredientItems" in data:
        # Un string se toma como lista separada por saltos de línea
        amounts = _string_list(data.get("ingredientAmounts"))
        items = _string_list(data.get("ingredientItems"))
    else:
        raw_ingredients = data.get("ingredients")
        ingredients = raw_ingredients if isinstance(raw_ingredients, list) else []
        amounts = [_ingredient_amount(ing) for ing in ingredients]
        items = [_ingredient_item(ing) for ing in ingredients]

    return FlattenedRecipe(
        name=_str_or(data.get("name"), DEFAULT_RECIPE_NAME),
        description=_str_or(data.get("description"), DEFAULT_DESCRIPTION),
        cuisine=_str_or(data.get("cuisine"), fallback_cuisine or DEFAULT_CUISINE),
        prep_time=_str_or(data.get("prepTime"), DEFAULT_PREP_TIME),
        cook_time=_str_or(data.get("cookTime"), DEFAULT_COOK_TIME),
        servings=parse_servings(data.get("servings")),
        difficulty=_str_or(data.get("difficulty"), DEFAULT_DIFFICULTY),
        ingredient_amounts=amounts,
        ingredient_items=items,
        instructions=_string_list(data.get("instructions")),
        tips=_string_list(data.get("tips")),
    )


# ============================================================
# API pública
# ============================================================

def parse_recipe_response(text: str, fallback_cuisine: str = DEFAULT_CUISINE) -> FlattenedRecipe:
    """
    Intenta el formato principal y, si falla, el fallback JSON.

    Raises:
        ParseError: si ningún formato soportado funciona.
    """
    try:
        flat = parse_line_format(text)
        logger.debug("Respuesta parseada con el formato de líneas")
        return flat
    except ParseError as line_error:
        logger.debug(f"Formato de líneas no aplicable ({line_error}); probando JSON")

    try:
        flat = parse_json_format(text, fallback_cuisine=fallback_cuisine)
        logger.debug("Respuesta parseada con el fallback JSON")
        return flat
    except ParseError as json_error:
        raise ParseError(
            f"Failed to parse AI response in any supported format ({json_error})"
        ) from json_error
