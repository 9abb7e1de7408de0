import pytest

from domain.models import FALLBACK_IMAGES, Recipe
from domain.services import toggle_favorite


def make_recipe(is_dalle_image: bool = True) -> Recipe:
    return Recipe(
        title="Tofu Delight",
        description="Crisp tofu.",
        image="https://images.test/tofu.png",
        prep_time="5 minutes",
        cook_time="10 minutes",
        ingredients=["tofu"],
        instructions=["Fry the tofu."],
        is_dalle_image=is_dalle_image,
    )


def test_image_load_failed() -> None:
    recipe = make_recipe()
    recipe.image_load_failed()
    assert recipe.image == FALLBACK_IMAGES[0]
    assert recipe.is_dalle_image is False

    recipe.image = "https://images.test/other.png"
    recipe.image_load_failed()
    assert recipe.image == "https://images.test/other.png"


def test_image_load_failed_on_stock_image() -> None:
    recipe = make_recipe(is_dalle_image=False)
    recipe.image_load_failed()
    assert recipe.image == "https://images.test/tofu.png"


def test_to_dict() -> None:
    got = make_recipe().to_dict()
    assert got["id"] is None
    assert got["ingredients"] == '["tofu"]'
    assert got["instructions"] == '["Fry the tofu."]'
    assert got["is_dalle_image"] is True


class FakeFavorites:
    def __init__(self) -> None:
        self.ids: set[str] = set()

    async def is_favorite(self, recipe_id: str, *, user_id: str) -> bool:
        return recipe_id in self.ids

    async def add(self, recipe: Recipe, *, user_id: str) -> str:
        recipe.id = recipe.id or "recipe-1"
        self.ids.add(recipe.id)
        return recipe.id

    async def remove(self, recipe_id: str, *, user_id: str) -> None:
        self.ids.discard(recipe_id)


@pytest.mark.asyncio
async def test_toggle_favorite() -> None:
    favorites = FakeFavorites()
    recipe = make_recipe()

    assert await toggle_favorite(
        recipe, user_id="u", favorites=favorites  # pyright: ignore[reportArgumentType]
    )
    assert favorites.ids == {"recipe-1"}

    assert not await toggle_favorite(
        recipe, user_id="u", favorites=favorites  # pyright: ignore[reportArgumentType]
    )
    assert favorites.ids == set()
