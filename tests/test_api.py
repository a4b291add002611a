import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_generator, get_resolver, get_store
from api.main import app
from recipe_ai_core.errors import TransportError

from .conftest import FakeClient


@pytest.fixture()
def client_factory(make_generator, store, resolver):
    def _make(fake=None):
        generator = make_generator(fake or FakeClient())
        app.dependency_overrides[get_generator] = lambda: generator
        app.dependency_overrides[get_store] = lambda: store
        app.dependency_overrides[get_resolver] = lambda: resolver
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health(client_factory):
    response = client_factory().get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_generate_then_cached(client_factory):
    client = client_factory()
    body = {"cuisines": ["italian"], "ingredients": ["tomato", "pasta", "garlic"]}

    first = client.post("/api/recipes/generate", json=body)
    assert first.status_code == 200
    data = first.json()
    assert data["success"] is True
    assert data["cached"] is False
    assert data["recipe"]["cuisine"] == "Italian"
    assert data["recipe"]["prepTime"] == "10"
    assert data["recipe"]["ingredients"][0] == {"amount": "200 g", "item": "pasta"}

    second = client.post("/api/recipes/generate", json=body)
    assert second.json()["cached"] is True
    assert second.json()["recipe"]["id"] == data["recipe"]["id"]


def test_generate_force_regenerate_and_model(client_factory):
    fake = FakeClient()
    client = client_factory(fake)
    body = {"cuisines": ["thai"], "ingredients": ["rice"]}

    client.post("/api/recipes/generate", json=body)
    response = client.post(
        "/api/recipes/generate?model=gpt-4o",
        json={**body, "forceRegenerate": True, "dietaryRestrictions": []},
    )

    assert response.json()["cached"] is False
    assert fake.calls[1]["model"] == "gpt-4o"
    assert response.json()["recipe"]["model"] == "gpt-4o"


def test_generate_validation_error_is_400(client_factory):
    fake = FakeClient()
    response = client_factory(fake).post(
        "/api/recipes/generate", json={"cuisines": [], "ingredients": ["tomato"]}
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "At least one cuisine must be selected"}
    assert fake.calls == []


@pytest.mark.parametrize(
    "body,error",
    [
        ({"cuisines": None, "ingredients": ["tomato"]}, "At least one cuisine must be selected"),
        ({"cuisines": ["italian"], "ingredients": "tomato"}, "At least one ingredient must be selected"),
    ],
)
def test_generate_null_or_malformed_lists_are_400(client_factory, body, error):
    fake = FakeClient()
    response = client_factory(fake).post("/api/recipes/generate", json=body)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": error}
    assert fake.calls == []


def test_non_integer_recipe_id_uses_error_envelope(client_factory):
    response = client_factory().get("/api/recipes/abc")

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "recipe_id" in response.json()["error"]


def test_openapi_documents_error_envelope(client_factory):
    schema = client_factory().get("/openapi.json").json()

    generate = schema["paths"]["/api/recipes/generate"]["post"]["responses"]
    assert generate["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert "404" in schema["paths"]["/api/recipes/{recipe_id}"]["get"]["responses"]


def test_generate_failure_is_500_with_message(client_factory):
    client = client_factory(FakeClient(TransportError("Connection error.")))
    response = client.post("/api/recipes/generate", json={"cuisines": ["italian"], "ingredients": ["tomato"]})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Connection error."}


def test_get_recipe_and_404(client_factory):
    client = client_factory()
    created = client.post("/api/recipes/generate", json={"cuisines": ["italian"], "ingredients": ["tomato"]}).json()
    recipe_id = created["recipe"]["id"]

    found = client.get(f"/api/recipes/{recipe_id}")
    assert found.status_code == 200
    assert found.json()["recipe"]["name"] == "Rustic Tomato Pasta"
    assert found.json()["recipe"]["cuisineIds"] == ["italian"]

    missing = client.get("/api/recipes/9999")
    assert missing.status_code == 404
    assert missing.json()["success"] is False


def test_recipe_substitutions(client_factory):
    client = client_factory()
    created = client.post("/api/recipes/generate", json={"cuisines": ["italian"], "ingredients": ["tomato"]}).json()
    recipe_id = created["recipe"]["id"]

    response = client.get(f"/api/recipes/{recipe_id}/substitutions", params={"dietary": "gluten-free"})

    data = response.json()
    assert data["recipeId"] == recipe_id
    assert data["substitutions"]["pasta"][0] == "rice noodles"
    assert "garlic" in data["substitutions"]


def test_similar_recipes_endpoint(client_factory):
    client = client_factory()
    base = client.post("/api/recipes/generate", json={"cuisines": ["italian"], "ingredients": ["tomato"]}).json()
    other = client.post("/api/recipes/generate", json={"cuisines": ["italian"], "ingredients": ["garlic"]}).json()

    response = client.get(f"/api/recipes/{base['recipe']['id']}/similar")

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["recommendations"]] == [other["recipe"]["id"]]
    assert client.get("/api/recipes/9999/similar").status_code == 404


def test_ingredient_substitutions(client_factory):
    response = client_factory().get("/api/substitutions/eggs", params={"dietary": "vegan"})

    data = response.json()
    assert data["ingredient"] == "eggs"
    assert data["substitutions"][:2] == ["flax eggs", "chia eggs"]


def test_catalog_endpoints(client_factory):
    client = client_factory()

    cuisines = client.get("/api/cuisines").json()
    assert cuisines["success"] is True
    assert cuisines["data"][0] == {"id": "italian", "name": "Italian", "description": "Pasta and pizza"}

    proteins = client.get("/api/ingredients", params={"category": "protein"}).json()
    assert [i["id"] for i in proteins["data"]] == ["salmon"]
