import json

from przepisy.main import main


def test_main_hides_excluded_recipes(tmp_path, capsys):
    data = [
        {"title": "Kurczak w curry", "ingredients": ["kurczak"], "tags": ["ostre"]},
        {"title": "Tarta cytrynowa", "ingredients": ["cytryny"], "tags": ["słodkie", "wypieki", "na imprezę"]},
        {"title": "Domowa pizza", "category": "Danie główne", "ingredients": ["mąka"], "tags": []},
    ]
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    assert main(["--data", str(path), "-x", "kurczak", "--infer-tags"]) == 0
    out = capsys.readouterr().out
    assert "Loaded 3 recipe(s), showing 2." in out
    assert "Kurczak w curry" not in out
    assert "- Tarta cytrynowa [słodkie, wypieki +1]" in out
    assert "- Domowa pizza [obiad, kuchnia włoska +1]" in out
