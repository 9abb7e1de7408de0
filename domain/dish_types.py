import re


# Order matters, the first hit wins.
DISH_TYPES = (
    "pasta",
    "salad",
    "soup",
    "stew",
    "curry",
    "stir-fry",
    "casserole",
    "roast",
    "grill",
    "sandwich",
    "burger",
    "pizza",
    "taco",
    "burrito",
    "risotto",
    "pilaf",
    "paella",
    "omelette",
    "frittata",
    "quiche",
    "cake",
    "pie",
    "cookie",
    "bread",
    "muffin",
    "pancake",
    "waffle",
)

DISH_SUFFIX = re.compile(
    r"\b\w+(?:soup|salad|stew|curry|pasta|sandwich|burger|pizza|cake|pie)\b"
)


def extract_dish_type(title: str, description: str) -> str | None:
    """Coarse dish category mentioned in the title or description, if any."""
    text = f"{title} {description}".lower()

    for dish_type in DISH_TYPES:
        if dish_type in text:
            return dish_type

    match = DISH_SUFFIX.search(text)
    if match:
        return match.group(0)

    return None
