"""Pick the ingredients worth showing in a generated food picture."""

import re

from domain.models import ScoredIngredient


# These skew an image towards a generic plate of food.
GENERIC_INGREDIENTS = (
    "salt",
    "pepper",
    "oil",
    "water",
    "sugar",
    "flour",
    "butter",
    "garlic",
    "onion",
    "spice",
    "herb",
    "seasoning",
    "vinegar",
)

DISTINCTIVE_INGREDIENTS = (
    # Proteins
    "chicken",
    "beef",
    "pork",
    "lamb",
    "fish",
    "salmon",
    "tuna",
    "shrimp",
    "tofu",
    # Vegetables
    "tomato",
    "carrot",
    "broccoli",
    "spinach",
    "kale",
    "pepper",
    "zucchini",
    "eggplant",
    "mushroom",
    # Fruits
    "apple",
    "orange",
    "lemon",
    "lime",
    "berry",
    "strawberry",
    "blueberry",
    "raspberry",
    "banana",
    # Other
    "cheese",
    "chocolate",
    "avocado",
    "egg",
    "rice",
    "pasta",
    "noodle",
    "bean",
    "lentil",
)

COLOUR_WORDS = (
    "red",
    "green",
    "yellow",
    "orange",
    "purple",
    "black",
    "white",
    "blue",
    "brown",
)

MEASUREMENT_PREFIX = re.compile(
    r"^\d+\s*/?\d*\s*"
    r"(tbsp|tsp|cup|g|oz|ml|pound|lb|pinch|dash|tablespoon|teaspoon)s?\b\s*(of)?\s*",
    re.IGNORECASE,
)
BULLET_PREFIX = re.compile(r"^[-*•]\s*")
MEASURED_PHRASE = re.compile(r"\d+\s*(tbsp|tsp|cup|g|oz|ml|pinch|dash)\s*of\s*")


def normalize_ingredient(ingredient: str) -> str:
    """'2 tbsp of Olive Oil' -> 'olive oil'."""
    ingredient = MEASUREMENT_PREFIX.sub("", ingredient)
    ingredient = BULLET_PREFIX.sub("", ingredient)
    return ingredient.strip().lower()


def is_generic_ingredient(ingredient: str) -> bool:
    lower = ingredient.lower()
    if MEASURED_PHRASE.search(lower):
        return True
    return any(generic in lower for generic in GENERIC_INGREDIENTS)


def score_ingredient(ingredient: str) -> ScoredIngredient:
    """Score an already normalised ingredient. Generic ones score 0."""
    if is_generic_ingredient(ingredient):
        return ScoredIngredient(ingredient, 0)

    score = 1
    if any(distinctive in ingredient for distinctive in DISTINCTIVE_INGREDIENTS):
        score += 3
    if any(colour in ingredient for colour in COLOUR_WORDS):
        score += 2
    # Longer names tend to be more specific.
    if len(ingredient) > 10:
        score += 1
    return ScoredIngredient(ingredient, score)


def extract_distinctive_ingredients(
    ingredients: list[str],
    max_count: int = 3,
) -> list[str]:
    """The `max_count` most visually distinctive ingredients, normalised.

    Ties keep their original order. When too few ingredients score, the list
    is topped up with the remaining non-generic ingredients in input order.
    """
    cleaned = [normalize_ingredient(i) for i in ingredients]
    scored = [score_ingredient(i) for i in cleaned]

    ranked = sorted(scored, key=lambda s: s.score, reverse=True)
    top = [
        s.ingredient
        for s in ranked[:max_count]
        if s.ingredient and not is_generic_ingredient(s.ingredient)
    ]

    if len(top) < min(max_count, len(ingredients)):
        for ingredient in cleaned:
            if ingredient in top or not ingredient:
                continue
            if is_generic_ingredient(ingredient):
                continue
            top.append(ingredient)
            if len(top) >= max_count:
                break

    return top
