"""Rutas de la API."""

from . import catalog, recipes, substitutions

__all__ = ["catalog", "recipes", "substitutions"]
