CREATE_RECIPE_PROMPT = """
Create a quick and easy recipe (15-20 minutes total cooking time) using these ingredients: {ingredients}.

The recipe should include:
1. A creative title
2. A brief description
3. Preparation time (around 5 minutes)
4. Cooking time (around 10-15 minutes)
5. A list of all ingredients with measurements
6. Step-by-step cooking instructions
7. A URL to an image that represents this dish (must be a valid, publicly accessible image URL)

Make sure the recipe is simple, delicious, and uses all or most of the provided ingredients.
For the image URL, please provide a link to a high-quality, appetizing image that accurately represents the dish.
""".strip()


IMAGE_PROMPT = (
    "generate an instagram food blog worthy food pic of a {dish}dish "
    "that includes these ingredients: {ingredients}"
)


class CreateRecipePrompt:
    def __init__(
        self,
        ingredients: list[str],
        content: str | None = None,
    ) -> None:
        self.ingredients = ingredients
        self.content = CREATE_RECIPE_PROMPT if content is None else content

    def __str__(self) -> str:
        return self.content.format(ingredients=", ".join(self.ingredients))


def image_prompt(ingredients: list[str], dish_type: str | None = None) -> str:
    dish = f"{dish_type} " if dish_type else ""
    return IMAGE_PROMPT.format(dish=dish, ingredients=", ".join(ingredients))
