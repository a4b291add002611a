"""
Modelos ORM del motor de recetas.

- `RecipeRecord`: receta persistida (cache de generaciones + catálogo de recetas).
- `CuisineRecord` / `IngredientRecord`: catálogo de ids → nombres visibles,
  usado por el resolver de nombres y expuesto a la UI.

Las listas (ingredientes, pasos, tips, ids) se guardan como JSON en columnas
Text, igual que el resto de la metadata flexible del proyecto.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class RecipeRecord(Base):
    """
    Receta persistida.

    `cache_key` es la forma canónica (ordenada, sin duplicados) de
    (cuisine_ids, ingredient_ids, dietary). NO es única: cada regeneración
    forzada agrega otra fila con la misma clave.
    """
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_cache_key_created", "cache_key", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Contenido
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    cuisine: Mapped[str] = mapped_column(String(100), default="")
    prep_time: Mapped[str] = mapped_column(String(50), default="")
    cook_time: Mapped[str] = mapped_column(String(50), default="")
    servings: Mapped[int] = mapped_column(Integer, default=4)
    difficulty: Mapped[str] = mapped_column(String(20), default="Medium")  # Easy | Medium | Hard

    ingredients_json: Mapped[str] = mapped_column(Text, default="[]")  # [{"amount", "item"}]
    instructions_json: Mapped[str] = mapped_column(Text, default="[]")
    tips_json: Mapped[str] = mapped_column(Text, default="[]")

    # Identidad de la generación
    cuisine_ids_json: Mapped[str] = mapped_column(Text, default="[]")
    ingredient_ids_json: Mapped[str] = mapped_column(Text, default="[]")
    dietary_json: Mapped[str] = mapped_column(Text, default="[]")
    cache_key: Mapped[str] = mapped_column(Text, index=True)

    # Trazabilidad
    provenance: Mapped[str] = mapped_column(String(20), default="ai")  # ai | custom
    model: Mapped[str] = mapped_column(String(100), default="")

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)


class CuisineRecord(Base):
    """
    Cocina disponible para seleccionar (ej: id="italian", name="Italian").
    """
    __tablename__ = "cuisines"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="")
    sort_order: Mapped[int] = mapped_column(Integer, default=0)


class IngredientRecord(Base):
    """
    Ingrediente disponible para seleccionar (ej: id="tomato", name="Tomato").
    """
    __tablename__ = "ingredients"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    category: Mapped[str] = mapped_column(String(50), default="", index=True)
