"""
Resolver de nombres: ids del catálogo → nombres visibles para el prompt.

También expone las consultas de catálogo que usa la API (listar cocinas e
ingredientes), porque leen las mismas tablas.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence, Type

from sqlalchemy import select
from sqlalchemy.orm import Session

from .db.database import guarded_session
from .db.models import CuisineRecord, IngredientRecord


class CatalogNameResolver:
    """
    Resolver respaldado por las tablas `cuisines` e `ingredients`.

    Preserva el orden de entrada; si un id no está en el catálogo, devuelve
    el id tal cual.
    """

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None):
        self._session_factory = session_factory

    def _resolve(self, model: Type[CuisineRecord] | Type[IngredientRecord], ids: Sequence[str]) -> List[str]:
        if not ids:
            return []
        stmt = select(model.id, model.name).where(model.id.in_(list(set(ids))))
        with guarded_session(self._session_factory) as session:
            names: Dict[str, str] = {row.id: row.name for row in session.execute(stmt)}
        return [names.get(i, i) for i in ids]

    def resolve_cuisine_names(self, ids: Sequence[str]) -> List[str]:
        return self._resolve(CuisineRecord, ids)

    def resolve_ingredient_names(self, ids: Sequence[str]) -> List[str]:
        return self._resolve(IngredientRecord, ids)

    def list_cuisines(self) -> List[dict]:
        stmt = select(CuisineRecord).order_by(CuisineRecord.sort_order, CuisineRecord.name)
        with guarded_session(self._session_factory) as session:
            return [
                {"id": c.id, "name": c.name, "description": c.description}
                for c in session.execute(stmt).scalars().all()
            ]

    def list_ingredients(self, category: Optional[str] = None) -> List[dict]:
        stmt = select(IngredientRecord).order_by(IngredientRecord.category, IngredientRecord.name)
        if category:
            stmt = stmt.where(IngredientRecord.category == category)
        with guarded_session(self._session_factory) as session:
            return [
                {"id": i.id, "name": i.name, "category": i.category}
                for i in session.execute(stmt).scalars().all()
            ]
