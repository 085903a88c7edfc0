from przepisy.normalize import PREPOSITIONS, ingredient_display, normalize_text
from przepisy.schemas import IngredientEntry


SAMPLES = [
    "Cebula",
    "  Kurczak   Z   ryżem ",
    "400g mielonej wołowiny",
    "dorsz w sosie",
    "z w na ze do",
    "",
    "!!!",
    "Filet\tz\npiersi",
]


def test_case_and_whitespace_are_folded():
    assert normalize_text("Cebula") == normalize_text("cebula") == normalize_text("CEBULA ")
    assert normalize_text("  mąka   pszenna\t typ 450 ") == "mąka pszenna typ 450"


def test_isolated_prepositions_are_removed():
    assert normalize_text("Kurczak z ryżem") == "kurczak ryżem"
    assert normalize_text("zupa ZE szczawiem") == "zupa szczawiem"
    assert normalize_text("z w na ze do") == ""
    assert "kurczak ryżem" in normalize_text("pierś: kurczak z ryżem")


def test_prepositions_inside_words_are_kept():
    # "do" and "na" are prefixes of real words here
    assert normalize_text("dorsz w sosie") == "dorsz sosie"
    assert normalize_text("naleśniki ze szpinakiem") == "naleśniki szpinakiem"
    assert normalize_text("zielona pietruszka") == "zielona pietruszka"


def test_idempotent():
    for s in SAMPLES:
        once = normalize_text(s)
        assert normalize_text(once) == once


def test_odd_input_never_raises():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""
    assert normalize_text(42) == "42"
    assert normalize_text("!!!") == "!!!"


def test_custom_prepositions():
    assert normalize_text("chicken with rice", frozenset({"with"})) == "chicken rice"
    assert "z" in PREPOSITIONS


def test_ingredient_display_shapes():
    assert ingredient_display("400g wołowiny") == "400g wołowiny"
    assert ingredient_display({"name": "mąka", "amount": "200 g"}) == "mąka (200 g)"
    assert ingredient_display({"name": "sól"}) == "sól"
    assert ingredient_display({"name": "sól", "amount": ""}) == "sól"
    assert ingredient_display(IngredientEntry(name="jajka", amount="2")) == "jajka (2)"
    assert ingredient_display(None) == ""
    assert ingredient_display(42) == "42"
    assert ingredient_display({"amount": "1 szt."}) == str({"amount": "1 szt."})
