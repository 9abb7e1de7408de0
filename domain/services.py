import logging
import random
from typing import Protocol

from domain.dish_types import extract_dish_type
from domain.ingredients import extract_distinctive_ingredients
from domain.models import FALLBACK_IMAGES, Recipe
from domain.parser import ParsedRecipe, fallback_fields, parse_completion
from domain.prompts import CreateRecipePrompt
from domain.repository import FavoritesRepository


logger = logging.getLogger(__name__)


IMAGE_INGREDIENTS = 4


class RecipeLLM(Protocol):
    async def complete(self, prompt: str) -> str:
        ...

    async def generate_image(
        self,
        ingredients: list[str],
        dish_type: str | None = None,
    ) -> str | None:
        ...


def split_ingredients(ingredients: str) -> list[str]:
    return [i.strip() for i in ingredients.split(",")]


async def recipe_image(fields: ParsedRecipe, *, llm: RecipeLLM) -> tuple[str, bool]:
    """Image url for the recipe and whether it was generated."""
    dish_type = extract_dish_type(fields["title"], fields["description"])
    logger.info("Dish type: %s", dish_type or "None detected")

    distinctive = extract_distinctive_ingredients(
        fields["ingredients"], IMAGE_INGREDIENTS
    )
    logger.info("Distinctive ingredients: %s", distinctive)

    url = await llm.generate_image(distinctive, dish_type)
    if url:
        return url, True

    logger.info("No generated image, using a stock image.")
    return random.choice(FALLBACK_IMAGES), False


async def _build_recipe(fields: ParsedRecipe, *, llm: RecipeLLM) -> Recipe:
    image, is_dalle_image = await recipe_image(fields, llm=llm)
    return Recipe(image=image, is_dalle_image=is_dalle_image, **fields)


async def fallback_recipe(ingredient_list: list[str], *, llm: RecipeLLM) -> Recipe:
    logger.info("Creating fallback recipe for %s", ingredient_list)
    return await _build_recipe(fallback_fields(ingredient_list), llm=llm)


async def recipe_from_completion(
    completion: str,
    ingredient_list: list[str],
    *,
    llm: RecipeLLM,
) -> Recipe:
    """Structured recipe from a completion. Falls back rather than raising."""
    try:
        fields = parse_completion(completion, ingredient_list)
        return await _build_recipe(fields, llm=llm)
    except Exception:
        logger.exception("Could not parse completion.")
    return await fallback_recipe(ingredient_list, llm=llm)


async def create_recipe(ingredients: str, *, llm: RecipeLLM) -> Recipe:
    """Core functionality. Create a recipe from a comma separated string."""
    logger.info("Generating recipe for %s", ingredients)
    ingredient_list = split_ingredients(ingredients)

    try:
        prompt = str(CreateRecipePrompt(ingredient_list))
        completion = await llm.complete(prompt)
        recipe = await recipe_from_completion(completion, ingredient_list, llm=llm)
    except Exception:
        logger.exception("Recipe generation failed, using fallback.")
        return await fallback_recipe(ingredient_list, llm=llm)

    logger.info("Generated %r", recipe)
    return recipe


async def toggle_favorite(
    recipe: Recipe,
    *,
    user_id: str,
    favorites: FavoritesRepository,
) -> bool:
    """Flip the favourite state of a recipe. Returns the new state."""
    if recipe.id is not None and await favorites.is_favorite(
        recipe.id, user_id=user_id
    ):
        await favorites.remove(recipe.id, user_id=user_id)
        return False
    await favorites.add(recipe, user_id=user_id)
    return True
