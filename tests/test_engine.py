import threading
import time

import pytest

from recipe_ai_core.errors import (
    GenerationError,
    ParseError,
    PersistenceError,
    TransportError,
    ValidationError,
)
from recipe_ai_core.prompts import RECIPE_SYSTEM_PROMPT

from .conftest import FakeClient, toon_response


def test_generate_fresh_recipe(generator, fake_client, store):
    result = generator.generate(["italian"], ["tomato", "pasta", "garlic"])

    assert result.cached is False
    assert len(fake_client.calls) == 1
    assert result.recipe.cuisine == "Italian"
    assert len(result.recipe.ingredients) >= 3
    assert result.recipe.id is not None
    assert result.recipe.provenance == "ai"
    assert result.recipe.model == "gpt-4o-mini"
    assert store.get(result.recipe.id).name == "Rustic Tomato Pasta"

    call = fake_client.calls[0]
    assert call["system"] == RECIPE_SYSTEM_PROMPT
    assert "Tomato, Pasta, Garlic" in call["user"]
    assert "Italian dish" in call["user"]


def test_second_call_is_served_from_cache(generator, fake_client):
    first = generator.generate(["italian"], ["tomato", "pasta", "garlic"])
    second = generator.generate(["italian"], ["tomato", "pasta", "garlic"])

    assert second.cached is True
    assert second.recipe.id == first.recipe.id
    assert len(fake_client.calls) == 1


def test_cache_lookup_ignores_order(generator, fake_client):
    first = generator.generate(["italian", "japanese"], ["salmon", "rice"])
    second = generator.generate(["japanese", "italian"], ["rice", "salmon", "rice"])

    assert second.cached is True
    assert second.recipe.id == first.recipe.id
    assert len(fake_client.calls) == 1


@pytest.mark.parametrize("cuisines,ingredients", [([], ["tomato"]), (["italian"], []), ([" "], ["tomato"])])
def test_validation_happens_before_any_generation(generator, fake_client, cuisines, ingredients):
    with pytest.raises(ValidationError):
        generator.generate(cuisines, ingredients)
    assert fake_client.calls == []


def test_validation_messages(generator):
    with pytest.raises(ValidationError, match="At least one cuisine must be selected"):
        generator.generate([], ["tomato"])
    with pytest.raises(ValidationError, match="At least one ingredient must be selected"):
        generator.generate(["italian"], [])


def test_force_regenerate_sends_every_existing_name(make_generator, store):
    client = FakeClient([toon_response("First Pasta"), toon_response("Second Pasta"), toon_response("Third Pasta")])
    generator = make_generator(client)

    generator.generate(["italian"], ["tomato"])
    generator.generate(["italian"], ["tomato"], force_regenerate=True)
    third = generator.generate(["italian"], ["tomato"], force_regenerate=True)

    assert third.cached is False
    assert third.recipe.name == "Third Pasta"
    assert "First Pasta" not in client.calls[0]["user"]
    last_prompt = client.calls[2]["user"]
    assert "First Pasta" in last_prompt
    assert "Second Pasta" in last_prompt
    assert len(store.find_by_exact_id_sets(["italian"], ["tomato"])) == 3


def test_cache_hit_returns_most_recent_after_regeneration(make_generator):
    client = FakeClient([toon_response("Old Pasta"), toon_response("New Pasta")])
    generator = make_generator(client)

    generator.generate(["italian"], ["tomato"])
    generator.generate(["italian"], ["tomato"], force_regenerate=True)
    cached = generator.generate(["italian"], ["tomato"])

    assert cached.cached is True
    assert cached.recipe.name == "New Pasta"
    assert len(client.calls) == 2


def test_avoid_list_limit_keeps_most_recent_names(make_generator):
    client = FakeClient([toon_response("Old Pasta"), toon_response("New Pasta"), toon_response("Newest Pasta")])
    generator = make_generator(client, avoid_list_limit=1)

    generator.generate(["italian"], ["tomato"])
    generator.generate(["italian"], ["tomato"], force_regenerate=True)
    generator.generate(["italian"], ["tomato"], force_regenerate=True)

    last_prompt = client.calls[2]["user"]
    assert "New Pasta" in last_prompt
    assert "Old Pasta" not in last_prompt


def test_dietary_restrictions_are_part_of_the_cache_key(generator, fake_client):
    plain = generator.generate(["italian"], ["tomato"])
    vegan = generator.generate(["italian"], ["tomato"], dietary_restrictions=["vegan"])
    vegan_again = generator.generate(["italian"], ["tomato"], dietary_restrictions=["Vegan"])

    assert vegan.cached is False
    assert vegan.recipe.id != plain.recipe.id
    assert vegan.recipe.dietary_restrictions == ["vegan"]
    assert vegan_again.cached is True
    assert "IMPORTANT: This recipe must be Vegan" in fake_client.calls[1]["user"]
    assert len(fake_client.calls) == 2


def test_dietary_labels_differing_in_case_are_sent_once(generator, fake_client):
    result = generator.generate(["italian"], ["tomato"], dietary_restrictions=["vegan", "Vegan", " VEGAN "])

    assert result.recipe.dietary_restrictions == ["vegan"]
    prompt = fake_client.calls[0]["user"]
    assert "must be Vegan." in prompt
    assert "Vegan, Vegan" not in prompt


def test_model_override_is_used_and_stored(generator, fake_client):
    result = generator.generate(["thai"], ["rice"], model="gpt-4o")

    assert fake_client.calls[0]["model"] == "gpt-4o"
    assert result.recipe.model == "gpt-4o"


def test_unknown_ids_pass_through_to_prompt(generator, fake_client):
    generator.generate(["peruvian"], ["quinoa"])
    assert "peruvian dish" in fake_client.calls[0]["user"]
    assert "quinoa" in fake_client.calls[0]["user"]


def test_transport_error_propagates_and_nothing_is_saved(make_generator, store):
    generator = make_generator(FakeClient(TransportError("Rate limit reached")))

    with pytest.raises(TransportError, match="Rate limit reached"):
        generator.generate(["italian"], ["tomato"])
    assert store.find_by_exact_id_sets(["italian"], ["tomato"]) == []


def test_parse_error_is_a_generation_error(make_generator, store):
    generator = make_generator(FakeClient("I am not a recipe"))

    with pytest.raises(GenerationError) as exc:
        generator.generate(["italian"], ["tomato"])
    assert isinstance(exc.value, ParseError)
    assert store.list_recent() == []


def test_unexpected_errors_are_wrapped(make_generator):
    generator = make_generator(FakeClient(ValueError("boom")))

    with pytest.raises(GenerationError, match="boom") as exc:
        generator.generate(["italian"], ["tomato"])
    assert isinstance(exc.value.__cause__, ValueError)


class _FailingSaveStore:
    def __init__(self, inner):
        self._inner = inner

    def find_by_exact_id_sets(self, *args, **kwargs):
        return self._inner.find_by_exact_id_sets(*args, **kwargs)

    def save(self, *args, **kwargs):
        raise PersistenceError("Database error: disk full")

    def get(self, recipe_id):
        return self._inner.get(recipe_id)


def test_persistence_error_on_save(store, resolver):
    from recipe_ai_core.engine import GeneratorDeps, RecipeGenerator

    generator = RecipeGenerator(
        GeneratorDeps(client=FakeClient(), resolver=resolver, store=_FailingSaveStore(store))
    )

    with pytest.raises(PersistenceError, match="disk full"):
        generator.generate(["italian"], ["tomato"])
    assert store.list_recent() == []


def test_concurrent_requests_for_same_key_generate_once(make_generator):
    entered = threading.Event()
    release = threading.Event()

    def block_first_call():
        entered.set()
        release.wait(timeout=5)

    client = FakeClient(on_call=block_first_call)
    generator = make_generator(client, lock_same_key=True)
    results = []

    def run():
        results.append(generator.generate(["italian"], ["tomato"]))

    first = threading.Thread(target=run)
    second = threading.Thread(target=run)
    first.start()
    assert entered.wait(timeout=5)
    second.start()
    time.sleep(0.2)
    release.set()
    first.join(timeout=5)
    second.join(timeout=5)

    assert len(client.calls) == 1
    assert sorted(r.cached for r in results) == [False, True]
    assert results[0].recipe.id == results[1].recipe.id
    assert generator._locks == {}
