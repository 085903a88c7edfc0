import copy

from przepisy.filtering import Conflict, filter_by_dietary_preferences, filter_for_user, find_conflict
from przepisy.schemas import Recipe


CURRY = {"id": 1, "title": "Kurczak w curry", "ingredients": ["500g kurczaka", "curry"]}
SALAD = {"id": 2, "title": "Sałatka jarzynowa", "ingredients": ["cebula", "groszek"]}
TART = {"id": 3, "title": "Tarta cytrynowa", "ingredients": ["cytryny", "mąka", "masło"]}


def _recipes():
    return [copy.deepcopy(r) for r in (CURRY, SALAD, TART)]


def test_title_match_excludes():
    assert filter_by_dietary_preferences([CURRY], ["kurczak"]) == []
    assert find_conflict(CURRY, ["kurczak"]) == Conflict("title", "Kurczak w curry", "kurczak")


def test_ingredient_match_excludes():
    assert filter_by_dietary_preferences([SALAD], ["cebula"]) == []
    conflict = find_conflict(SALAD, ["cebula"])
    assert conflict.source == "ingredient"
    assert conflict.text == "cebula"


def test_no_match_keeps_recipe():
    assert filter_by_dietary_preferences([TART], ["cebula", "kurczak"]) == [TART]
    assert find_conflict(TART, ["cebula", "kurczak"]) is None


def test_empty_preferences_is_identity():
    recipes = _recipes()
    assert filter_by_dietary_preferences(recipes, []) is recipes


def test_result_is_ordered_subsequence():
    recipes = _recipes() + [{"id": 4, "title": "Tost", "ingredients": ["chleb"]}]
    result = filter_by_dietary_preferences(recipes, ["cebula"])
    assert [r["id"] for r in result] == [1, 3, 4]
    # same objects, not copies
    assert all(any(r is orig for orig in recipes) for r in result)


def test_inputs_are_not_mutated():
    recipes = _recipes()
    snapshot = copy.deepcopy(recipes)
    filter_by_dietary_preferences(recipes, ["cebula", "kurczak"])
    assert recipes == snapshot


def test_malformed_ingredients_fail_open():
    odd = [
        {"id": 10, "title": "Zupa dnia", "ingredients": None},
        {"id": 11, "title": "Zupa dnia", "ingredients": "cebula, marchew"},
        {"id": 12, "title": "Zupa dnia", "ingredients": 42},
        {"id": 13, "title": "Zupa dnia"},
    ]
    assert filter_by_dietary_preferences(odd, ["cebula"]) == odd


def test_structured_ingredients():
    recipe = {
        "id": 5,
        "title": "Gulasz",
        "ingredients": [{"name": "wołowina", "amount": "1 kg"}, {"name": "cebula"}],
    }
    assert filter_by_dietary_preferences([recipe], ["cebula"]) == []
    assert find_conflict(recipe, ["wołowina"]).text == "wołowina (1 kg)"


def test_odd_ingredient_entries_are_stringified():
    recipe = {"id": 6, "title": "Sok", "ingredients": [None, 3, "jabłka"]}
    assert filter_by_dietary_preferences([recipe], ["gruszki"]) == [recipe]
    assert filter_by_dietary_preferences([recipe], ["jabłka"]) == []


def test_title_uses_normalized_substring():
    recipe = {"id": 7, "title": "Makaron  Z  Grzybami", "ingredients": []}
    assert filter_by_dietary_preferences([recipe], ["makaron grzybami"]) == []


def test_works_with_models():
    model = Recipe(id=8, title="Pierogi", ingredients=["mąka", {"name": "cebula", "amount": "1"}])
    assert filter_by_dietary_preferences([model], ["cebula"]) == []
    assert filter_by_dietary_preferences([model], ["grzyby"]) == [model]


class FakePreferences:
    def __init__(self, by_user):
        self.by_user = by_user

    def fetch_preferences(self, user_id):
        return self.by_user.get(user_id, [])


def test_filter_for_user_reads_store_snapshot():
    store = FakePreferences({"ala": ["cebula"]})
    recipes = _recipes()
    assert [r["id"] for r in filter_for_user(recipes, store, "ala")] == [1, 3]
    # unknown user: empty preferences, nothing hidden
    assert filter_for_user(recipes, store, "ola") is recipes
