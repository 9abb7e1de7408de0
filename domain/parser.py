"""Turn a free-text completion into recipe fields.

Every rule falls back to a deterministic default, and the rules run in a fixed
order: title, description, times, ingredients, instructions. Nothing here
talks to the network, see `domain.services` for the image step.
"""

import re
from typing import Any, TypeAlias


ParsedRecipe: TypeAlias = dict[str, Any]


DEFAULT_PREP_TIME = "5 minutes"
DEFAULT_COOK_TIME = "10 minutes"
MAX_TITLE_LENGTH = 50
DESCRIPTION_WINDOW = 5

TITLE_HASHES = re.compile(r"^#+\s*")
TITLE_PREFIX = re.compile(r"^title:\s*", re.IGNORECASE)
DESCRIPTION_PREFIX = re.compile(r"^description:\s*", re.IGNORECASE)
NOT_A_DESCRIPTION = re.compile(
    r"prep time|cook time|ingredients|instructions", re.IGNORECASE
)
PREP_TIME = re.compile(r"prep\s*time:?\s*(\d+[-\s]?\d*\s*minutes?)", re.IGNORECASE)
COOK_TIME = re.compile(r"cook\s*time:?\s*(\d+[-\s]?\d*\s*minutes?)", re.IGNORECASE)
INGREDIENTS_HEADER = re.compile(r"ingredients", re.IGNORECASE)
INSTRUCTIONS_HEADER = re.compile(r"instructions|directions|steps", re.IGNORECASE)
BULLET = re.compile(r"^\s*[-*•]\s+")
MEASUREMENT = re.compile(r"\d+\s*(cup|tbsp|tsp|g|oz|ml|pound|lb)", re.IGNORECASE)
NUMBERED_STEP = re.compile(r"^\s*\d+[.)]\s+")


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def fallback_title(ingredient_list: list[str]) -> str:
    return f"{_capitalize(ingredient_list[0])} Delight"


def fallback_description(ingredient_list: list[str]) -> str:
    return (
        f"A quick and easy recipe using {', '.join(ingredient_list)}. "
        "Ready in just 15 minutes!"
    )


def fallback_instructions(ingredient_list: list[str]) -> list[str]:
    first, rest = ingredient_list[0], ingredient_list[1:]
    return [
        f"Prepare the {first} by washing and cutting into bite-sized pieces.",
        "Heat a pan over medium heat and add a tablespoon of oil.",
        f"Add {first} to the pan and cook for 5 minutes.",
        (
            f"Add {', '.join(rest)} and cook for another 5 minutes."
            if rest
            else "Cook for another 5 minutes."
        ),
        "Season with salt and pepper to taste.",
        "Serve hot and enjoy your meal!",
    ]


def parse_title(lines: list[str], ingredient_list: list[str]) -> str:
    title = TITLE_HASHES.sub("", lines[0]).strip()
    title = TITLE_PREFIX.sub("", title)
    if not title or len(title) > MAX_TITLE_LENGTH:
        return fallback_title(ingredient_list)
    return title


def parse_description(lines: list[str], ingredient_list: list[str]) -> str:
    description = ""
    for line in lines[1 : min(DESCRIPTION_WINDOW, len(lines))]:
        line = line.strip()
        if line and not line.startswith("#") and not NOT_A_DESCRIPTION.search(line):
            description = line
            break

    description = DESCRIPTION_PREFIX.sub("", description)
    return description or fallback_description(ingredient_list)


def parse_times(completion: str) -> tuple[str, str]:
    prep = PREP_TIME.search(completion)
    cook = COOK_TIME.search(completion)
    return (
        prep.group(1) if prep else DEFAULT_PREP_TIME,
        cook.group(1) if cook else DEFAULT_COOK_TIME,
    )


def parse_ingredients(lines: list[str], ingredient_list: list[str]) -> list[str]:
    ingredients: list[str] = []
    in_section = False

    for line in lines:
        if INGREDIENTS_HEADER.search(line):
            in_section = True
            continue
        if not in_section:
            continue
        if INSTRUCTIONS_HEADER.search(line):
            in_section = False
            continue
        if BULLET.search(line) or MEASUREMENT.search(line):
            ingredients.append(BULLET.sub("", line).strip())

    return ingredients or list(ingredient_list)


def parse_instructions(lines: list[str], ingredient_list: list[str]) -> list[str]:
    instructions: list[str] = []
    in_section = False

    for line in lines:
        if INSTRUCTIONS_HEADER.search(line):
            in_section = True
            continue
        if not in_section:
            continue
        if NUMBERED_STEP.search(line) or BULLET.search(line):
            step = NUMBERED_STEP.sub("", line)
            instructions.append(BULLET.sub("", step).strip())

    return instructions or fallback_instructions(ingredient_list)


def parse_completion(completion: str, ingredient_list: list[str]) -> ParsedRecipe:
    """Recipe fields from a completion, minus the image.

    Raises ValueError for a completion with no text at all.
    """
    lines = [line for line in completion.split("\n") if line.strip()]
    if not lines:
        raise ValueError("Empty completion.")

    title = parse_title(lines, ingredient_list)
    description = parse_description(lines, ingredient_list)
    prep_time, cook_time = parse_times(completion)
    ingredients = parse_ingredients(lines, ingredient_list)
    instructions = parse_instructions(lines, ingredient_list)

    return {
        "title": title,
        "description": description,
        "prep_time": prep_time,
        "cook_time": cook_time,
        "ingredients": ingredients,
        "instructions": instructions,
    }


def fallback_fields(ingredient_list: list[str]) -> ParsedRecipe:
    return {
        "title": fallback_title(ingredient_list),
        "description": fallback_description(ingredient_list),
        "prep_time": DEFAULT_PREP_TIME,
        "cook_time": DEFAULT_COOK_TIME,
        "ingredients": list(ingredient_list),
        "instructions": fallback_instructions(ingredient_list),
    }
