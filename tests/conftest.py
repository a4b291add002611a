"""
Fixtures compartidas: base SQLite en memoria, catálogo mínimo y un cliente
de modelo falso que devuelve respuestas enlatadas.
"""

from __future__ import annotations

import threading
from typing import Callable, List, Optional, Union

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_ai_core.db import models  # noqa: F401  (registra las tablas)
from recipe_ai_core.db.database import Base, session_scope
from recipe_ai_core.db.models import CuisineRecord, IngredientRecord
from recipe_ai_core.db.store import SqlAlchemyRecipeStore
from recipe_ai_core.engine import GeneratorDeps, RecipeGenerator
from recipe_ai_core.names import CatalogNameResolver


TOON_RESPONSE = """name: Rustic Tomato Pasta
description: A simple weeknight pasta
cuisine: Italian
prepTime: 10
cookTime: 20
servings: 4
difficulty: Easy
ingredientAmounts:
  - 200 g
  - 3
  - 2 cloves
ingredientItems:
  - pasta
  - tomatoes
  - garlic
instructions:
  - Boil the pasta
  - Make the sauce
tips:
  - Salt the water
"""


def toon_response(name: str) -> str:
    return TOON_RESPONSE.replace("Rustic Tomato Pasta", name)


class FakeClient:
    """
    Generation Client falso.

    `responses` puede ser un string (siempre el mismo), una lista (uno por
    llamada, en orden) o una excepción a lanzar.
    """

    def __init__(self, responses: Union[str, List[str], Exception] = TOON_RESPONSE, on_call: Optional[Callable[[], None]] = None):
        self._responses = responses
        self._on_call = on_call
        self._lock = threading.Lock()
        self.calls: List[dict] = []

    def complete(self, system_prompt: str, user_prompt: str, model: str) -> str:
        with self._lock:
            index = len(self.calls)
            self.calls.append({"system": system_prompt, "user": user_prompt, "model": model})

        if self._on_call is not None:
            self._on_call()

        if isinstance(self._responses, Exception):
            raise self._responses
        if isinstance(self._responses, list):
            return self._responses[index]
        return self._responses


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    with session_scope(factory) as session:
        session.add_all(
            [
                CuisineRecord(id="italian", name="Italian", description="Pasta and pizza", sort_order=10),
                CuisineRecord(id="japanese", name="Japanese", description="Sushi and ramen", sort_order=20),
                CuisineRecord(id="thai", name="Thai", description="Sweet and spicy", sort_order=30),
                IngredientRecord(id="tomato", name="Tomato", category="vegetable"),
                IngredientRecord(id="pasta", name="Pasta", category="grain"),
                IngredientRecord(id="garlic", name="Garlic", category="vegetable"),
                IngredientRecord(id="salmon", name="Salmon", category="protein"),
                IngredientRecord(id="rice", name="Rice", category="grain"),
            ]
        )

    yield factory
    engine.dispose()


@pytest.fixture()
def store(session_factory):
    return SqlAlchemyRecipeStore(session_factory)


@pytest.fixture()
def resolver(session_factory):
    return CatalogNameResolver(session_factory)


@pytest.fixture()
def fake_client():
    return FakeClient()


@pytest.fixture()
def make_generator(store, resolver):
    def _make(client=None, **kwargs) -> RecipeGenerator:
        return RecipeGenerator(
            GeneratorDeps(
                client=client or FakeClient(),
                resolver=resolver,
                store=store,
                **kwargs,
            )
        )

    return _make


@pytest.fixture()
def generator(make_generator, fake_client):
    return make_generator(fake_client)
