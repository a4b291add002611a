"""
recipe_ai_core.cli
==================

Punto de entrada mínimo para generar una receta desde la terminal, sin
levantar la API. Útil para:
- demo local rápida,
- smoke tests manuales del prompt / parser contra el modelo real.

Usa la misma base (`DATABASE_URL`) y la misma cache que la API: correr dos
veces la misma combinación devuelve la receta guardada, salvo `--force`.

Ejemplo
-------
    recipe-ai --cuisine italian --cuisine japanese \\
              --ingredient salmon --ingredient rice --diet gluten-free
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional

from .db.database import init_db
from .engine import build_default_generator, validate_selection
from .errors import RecipeAIError, ValidationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recipe-ai",
        description="Genera (o recupera de la cache) una receta para cocinas + ingredientes.",
    )
    parser.add_argument("--cuisine", "-c", action="append", default=[], help="id de cocina (repetible)")
    parser.add_argument("--ingredient", "-i", action="append", default=[], help="id de ingrediente (repetible)")
    parser.add_argument("--diet", "-d", action="append", default=[], help="restricción alimentaria (repetible)")
    parser.add_argument("--force", action="store_true", help="ignorar la cache y pedir una receta distinta")
    parser.add_argument("--model", default=None, help="modelo a usar (default: OPENAI_MODEL_TEXT)")
    parser.add_argument("--verbose", "-v", action="store_true", help="logs en nivel DEBUG")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        validate_selection(args.cuisine, args.ingredient)
        init_db()
        generator = build_default_generator()
        result = generator.generate(
            cuisine_ids=args.cuisine,
            ingredient_ids=args.ingredient,
            force_regenerate=args.force,
            dietary_restrictions=args.diet,
            model=args.model,
        )
    except ValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    except RecipeAIError as e:
        print(f"❌ Error generando la receta: {e}", file=sys.stderr)
        return 1
    except RuntimeError as e:
        # Configuración incompleta (ej: falta OPENAI_API_KEY)
        print(f"❌ {e}", file=sys.stderr)
        return 1

    origin = "cache" if result.cached else "nueva"
    print(f"✅ Receta ({origin}): {result.recipe.name}", file=sys.stderr)
    print(json.dumps(asdict(result.recipe), ensure_ascii=False, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
