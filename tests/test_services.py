import httpx
import pytest

from config import Config
from domain.llm_service import LLMService, MissingApiKey
from domain.models import FALLBACK_IMAGES, Recipe
from domain.services import create_recipe, recipe_from_completion, split_ingredients


COMPLETION = """
# Garlic Chicken Rice Bowl
A speedy one-pan dinner with tender chicken and fluffy rice.
Prep Time: 5 minutes
Cook Time: 12 minutes

Ingredients:
- 2 chicken breasts, diced
- 1 cup cooked rice
2 tbsp soy sauce

Instructions:
1. Heat the oil in a large pan.
2. Add the chicken and cook until golden.
3. Stir in the rice and soy sauce.
"""


class FakeLLM:
    def __init__(
        self,
        completion: str = "",
        image: str | None = None,
        error: Exception | None = None,
    ) -> None:
        self.completion = completion
        self.image = image
        self.error = error
        self.prompts: list[str] = []
        self.image_requests: list[tuple[list[str], str | None]] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.completion

    async def generate_image(
        self,
        ingredients: list[str],
        dish_type: str | None = None,
    ) -> str | None:
        self.image_requests.append((ingredients, dish_type))
        return self.image


def assert_fallback_recipe(recipe: Recipe, ingredients: list[str]) -> None:
    assert recipe.title == f"{ingredients[0].capitalize()} Delight"
    assert recipe.ingredients == ingredients
    assert recipe.prep_time == "5 minutes"
    assert recipe.cook_time == "10 minutes"
    assert len(recipe.instructions) == 6
    assert recipe.image in FALLBACK_IMAGES
    assert recipe.is_dalle_image is False


def test_split_ingredients() -> None:
    assert split_ingredients(" chicken,rice , broccoli ") == [
        "chicken",
        "rice",
        "broccoli",
    ]


@pytest.mark.asyncio
async def test_create_recipe() -> None:
    llm = FakeLLM(completion=COMPLETION, image="https://images.test/bowl.png")
    got = await create_recipe("chicken, rice", llm=llm)

    assert got.title == "Garlic Chicken Rice Bowl"
    assert got.cook_time == "12 minutes"
    assert got.ingredients == [
        "2 chicken breasts, diced",
        "1 cup cooked rice",
        "2 tbsp soy sauce",
    ]
    assert len(got.instructions) == 3
    assert got.image == "https://images.test/bowl.png"
    assert got.is_dalle_image is True
    assert got.id is None

    assert len(llm.prompts) == 1
    assert "using these ingredients: chicken, rice." in llm.prompts[0]
    assert llm.image_requests == [
        (["2 chicken breasts, diced", "cooked rice", "soy sauce"], None)
    ]


@pytest.mark.asyncio
async def test_create_recipe_without_generated_image() -> None:
    got = await create_recipe("chicken, rice", llm=FakeLLM(completion=COMPLETION))
    assert got.title == "Garlic Chicken Rice Bowl"
    assert got.image in FALLBACK_IMAGES
    assert got.is_dalle_image is False


@pytest.mark.parametrize(
    "error",
    (
        httpx.ConnectError("Connection refused"),
        MissingApiKey("open_router_api_key"),
        KeyError("choices"),
    ),
)
@pytest.mark.asyncio
async def test_create_recipe_falls_back_when_llm_fails(error: Exception) -> None:
    llm = FakeLLM(error=error)
    got = await create_recipe("chicken, rice, broccoli", llm=llm)
    assert_fallback_recipe(got, ["chicken", "rice", "broccoli"])
    assert got.description == (
        "A quick and easy recipe using chicken, rice, broccoli. "
        "Ready in just 15 minutes!"
    )


@pytest.mark.asyncio
async def test_create_recipe_falls_back_on_empty_completion() -> None:
    got = await create_recipe("tofu", llm=FakeLLM(completion=""))
    assert_fallback_recipe(got, ["tofu"])
    assert got.instructions[3] == "Cook for another 5 minutes."


@pytest.mark.asyncio
async def test_fallback_recipe_can_use_generated_image() -> None:
    llm = FakeLLM(error=RuntimeError("boom"), image="https://images.test/fallback.png")
    got = await create_recipe("salmon, lemon, salt", llm=llm)
    assert got.title == "Salmon Delight"
    assert got.image == "https://images.test/fallback.png"
    assert got.is_dalle_image is True
    assert llm.image_requests == [(["salmon", "lemon"], None)]


@pytest.mark.asyncio
async def test_recipe_from_completion_passes_dish_type() -> None:
    llm = FakeLLM(image="https://images.test/stew.png")
    completion = "A Hearty Beef Stew\nWarming and rich.\nCook time: 15 minutes"
    got = await recipe_from_completion(completion, ["beef", "carrot"], llm=llm)
    assert got.title == "A Hearty Beef Stew"
    assert got.ingredients == ["beef", "carrot"]
    assert llm.image_requests == [(["beef", "carrot"], "stew")]


@pytest.mark.asyncio
async def test_create_recipe_without_api_key() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={})

    config = Config(open_router_api_key=None, openai_dall_e_api_key=None)
    llm = LLMService(
        config,
        http_client=httpx.AsyncClient(
            base_url=config.open_router_base_url,
            transport=httpx.MockTransport(handler),
        ),
    )
    got = await create_recipe("chicken, rice, broccoli", llm=llm)
    await llm.close()

    assert_fallback_recipe(got, ["chicken", "rice", "broccoli"])
    assert requests == []


@pytest.mark.asyncio
async def test_create_recipe_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": {"message": "unavailable"}})

    config = Config(open_router_api_key="key", openai_dall_e_api_key=None)
    llm = LLMService(
        config,
        http_client=httpx.AsyncClient(
            base_url=config.open_router_base_url,
            transport=httpx.MockTransport(handler),
        ),
    )
    got = await create_recipe("chicken, rice, broccoli", llm=llm)
    await llm.close()

    assert_fallback_recipe(got, ["chicken", "rice", "broccoli"])
