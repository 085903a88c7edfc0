import argparse
from pathlib import Path

from .filtering import filter_by_dietary_preferences
from .recipes import load_recipes, sort_by_rating, tag_summary
from .tagging import infer_tags, needs_tags

DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "recipes.json"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="przepisy",
        description="List recipes, hiding those with excluded ingredients.",
    )
    parser.add_argument("--data", default=str(DEFAULT_DATA_FILE), help="recipes JSON file")
    parser.add_argument(
        "-x", "--exclude", action="append", default=[], metavar="INGREDIENT",
        help="ingredient to exclude (repeatable)",
    )
    parser.add_argument(
        "--infer-tags", action="store_true",
        help="show inferred tags for recipes without tags",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    recipes = load_recipes(args.data)
    shown = sort_by_rating(filter_by_dietary_preferences(recipes, args.exclude))
    print(f"Loaded {len(recipes)} recipe(s), showing {len(shown)}.")
    for r in shown:
        tags = r.get("tags") or []
        if args.infer_tags and needs_tags(r):
            tags = infer_tags(r)
        visible, rest = tag_summary(tags)
        suffix = f" +{rest}" if rest else ""
        print(f"- {r.get('title')} [{', '.join(visible)}{suffix}]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
