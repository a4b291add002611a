# recipe_ai_core/prompts.py

"""
Prompts e instrucciones para la generación de recetas.

El formato de salida que le pedimos al modelo es una notación "aplanada"
basada en indentación (sin llaves ni corchetes): campos escalares `clave: valor`
y cuatro secciones de lista (`ingredientAmounts`, `ingredientItems`,
`instructions`, `tips`) con viñetas. Es bastante más barato en tokens que JSON
para esta forma. El parser (`recipe_ai_core.parser`) igual acepta JSON como
fallback por si el modelo ignora las instrucciones.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .errors import ValidationError

RECIPE_SYSTEM_PROMPT = (
    "You are a professional chef and recipe creator. Generate detailed, accurate, "
    "and delicious recipes. Always respond in TOON format (Token-Oriented Object "
    "Notation) with flattened structure - use indentation-based syntax, no braces "
    "or brackets, separate arrays for related data (ingredientAmounts and "
    "ingredientItems instead of nested objects)."
)


def get_recipe_system_prompt() -> str:
    return RECIPE_SYSTEM_PROMPT


def format_dietary_restriction(label: str) -> str:
    """
    "gluten-free" -> "Gluten Free", "low-carb-diet" -> "Low Carb Diet".

    Solo se capitaliza la primera letra de cada palabra; el resto se deja
    como venga ("dairy-FREE" -> "Dairy FREE").
    """
    spaced = label.strip().replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), spaced)


def _cuisine_text(cuisines: Sequence[str]) -> str:
    if len(cuisines) == 1:
        return cuisines[0]
    return f"a fusion of {' and '.join(cuisines)}"


def build_recipe_prompt(
    cuisines: Sequence[str],
    ingredients: Sequence[str],
    avoid_similar_to: Sequence[str] | None = None,
    dietary_restrictions: Sequence[str] | None = None,
) -> str:
    """
    Construye el prompt de usuario para generar una receta.

    Args:
        cuisines: Nombres visibles de las cocinas (al menos uno).
        ingredients: Nombres visibles de los ingredientes (al menos uno).
            Todos deben aparecer en la receta.
        avoid_similar_to: Nombres de recetas existentes para la misma
            combinación. Si hay alguno, se exige una receta materialmente
            distinta (nombre, método de cocción y perfil de sabor).
        dietary_restrictions: Etiquetas tipo "gluten-free", "vegan".

    Returns:
        Prompt completo como string. Función pura, sin efectos secundarios.
    """
    if not cuisines:
        raise ValidationError("At least one cuisine must be selected")
    if not ingredients:
        raise ValidationError("At least one ingredient must be selected")

    cuisine_text = _cuisine_text(cuisines)
    ingredients_text = ", ".join(ingredients)
    avoid = [name for name in (avoid_similar_to or []) if name]
    restrictions = [r for r in (dietary_restrictions or []) if r and r.strip()]

    parts: List[str] = []
    parts.append(
        f"Create a detailed recipe for a {cuisine_text} dish using the following "
        f"ingredients: {ingredients_text}."
    )

    if avoid:
        parts.append(
            "\n\nCRITICAL: Generate a COMPLETELY DIFFERENT and UNIQUE recipe. "
            f"Avoid creating recipes similar to these existing ones: {', '.join(avoid)}. "
            "Create a new variation with a different name, different cooking method, "
            "and different flavor profile."
        )

    if restrictions:
        restrictions_text = ", ".join(format_dietary_restriction(r) for r in restrictions)
        parts.append(
            f"\n\nIMPORTANT: This recipe must be {restrictions_text}. Ensure all "
            "ingredients and cooking methods comply with these dietary restrictions. "
            "Do not use any ingredients that violate these restrictions."
        )

    parts.append(
        f"""

Please provide a complete recipe in TOON format (Token-Oriented Object Notation) with the following flattened structure:
name: Recipe name
description: Brief description of the dish
cuisine: {cuisines[0]}
prepTime: preparation time in minutes
cookTime: cooking time in minutes
servings: number of servings
difficulty: Easy, Medium, or Hard
ingredientAmounts:
  - quantity 1
  - quantity 2
  - quantity 3
ingredientItems:
  - ingredient name 1
  - ingredient name 2
  - ingredient name 3
instructions:
  - Step 1 instruction
  - Step 2 instruction
  - Step 3 instruction
tips:
  - Helpful tip 1
  - Helpful tip 2

Important:
- Use TOON format (indentation-based, no braces or brackets)
- Keep structure flat (no nested objects)
- ingredientAmounts and ingredientItems arrays must have matching lengths
- Use all the provided ingredients in the recipe
- Make the recipe authentic to the {cuisine_text} cuisine style
- Provide clear, step-by-step instructions
- Include helpful cooking tips
- Ensure amounts are realistic and practical
- Make the recipe name creative and appealing"""
    )

    if avoid:
        parts.append(
            "\n- Ensure the recipe name and approach are completely different "
            "from the existing recipes mentioned above"
        )

    return "".join(parts)
