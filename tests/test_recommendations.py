from recipe_ai_core.domain_models import Recipe
from recipe_ai_core.recommendations import similar_recipes, similarity_score


def _save(store, name, cuisines, ingredients):
    recipe = Recipe(
        name=name,
        description="",
        cuisine="",
        prep_time="10",
        cook_time="10",
        servings=2,
        difficulty="Easy",
    )
    return store.save(recipe, cuisines, ingredients, provenance="ai", model="m")


def test_similarity_score_weights_cuisines():
    base = Recipe(name="a", description="", cuisine="", prep_time="", cook_time="", servings=1, difficulty="Easy",
                  cuisine_ids=["italian", "thai"], ingredient_ids=["rice", "garlic"])
    other = Recipe(name="b", description="", cuisine="", prep_time="", cook_time="", servings=1, difficulty="Easy",
                   cuisine_ids=["italian"], ingredient_ids=["rice", "garlic", "salmon"])
    assert similarity_score(base, other) == 2 + 2


def test_similar_recipes_ranked_by_score(store):
    base = _save(store, "Base", ["italian"], ["rice", "garlic"])
    one_ingredient = _save(store, "One ingredient", ["thai"], ["rice"])
    cuisine_and_ingredient = _save(store, "Cuisine + ingredient", ["italian"], ["garlic"])
    _save(store, "Unrelated", ["japanese"], ["salmon"])

    found = similar_recipes(store, base.id, limit=5)

    assert [r.id for r in found] == [cuisine_and_ingredient.id, one_ingredient.id]


def test_similar_recipes_respects_limit(store):
    base = _save(store, "Base", ["italian"], ["rice"])
    for i in range(4):
        _save(store, f"Other {i}", ["italian"], ["rice"])

    assert len(similar_recipes(store, base.id, limit=2)) == 2


def test_unknown_recipe_has_no_similar(store):
    assert similar_recipes(store, 12345) == []
