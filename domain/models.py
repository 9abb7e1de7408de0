import json
from typing import Any, Mapping, Self


FALLBACK_IMAGES = (
    "https://media.istockphoto.com/id/513124350/photo/cuisine-of-different-countries.jpg?s=612x612&w=0&k=20&c=KlcikHT7Cw5pLOynGjB4w_q3TAh-iDnpPHClBEfIBbY=",
    "https://img.freepik.com/premium-photo/beautiful-spread-diverse-culinary-dishes-showcasing-vibrant-mix-flavors-cuisines-from-around-world-grand-array-dishes-from-around-world_538213-76553.jpg",
    "https://img.freepik.com/premium-photo/table-full-food-including-turkey-turkey-turkey_670382-12577.jpg",
)


class Recipe:
    def __init__(
        self,
        *,
        title: str,
        description: str,
        image: str,
        prep_time: str,
        cook_time: str,
        ingredients: list[str],
        instructions: list[str],
        is_dalle_image: bool = False,
        id: str | None = None,
    ) -> None:
        self.id = id
        self.title = title
        self.description = description
        self.image = image
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.ingredients = ingredients
        self.instructions = instructions
        self.is_dalle_image = is_dalle_image

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        """Build a recipe from a `recipes` row."""
        return cls(
            id=record["id"],
            title=record["title"],
            description=record["description"],
            image=record["image"],
            prep_time=record["prep_time"],
            cook_time=record["cook_time"],
            ingredients=json.loads(record["ingredients"]),
            instructions=json.loads(record["instructions"]),
            is_dalle_image=bool(record["is_dalle_image"]),
        )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title={self.title})>"

    def __str__(self) -> str:
        return self.title

    def image_load_failed(self) -> None:
        """Swap a generated image that could not be loaded for a stock one.

        Only generated images are replaced and the flag is cleared, so a
        second failure leaves the recipe alone.
        """
        if self.is_dalle_image:
            self.image = FALLBACK_IMAGES[0]
            self.is_dalle_image = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "prep_time": self.prep_time,
            "cook_time": self.cook_time,
            "ingredients": json.dumps(self.ingredients),
            "instructions": json.dumps(self.instructions),
            "is_dalle_image": self.is_dalle_image,
        }


class ScoredIngredient:
    def __init__(self, ingredient: str, score: int) -> None:
        self.ingredient = ingredient
        self.score = score

    def __repr__(self) -> str:
        return f"<ScoredIngredient({self.ingredient!r}, score={self.score})>"
