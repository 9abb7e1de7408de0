from datetime import datetime, timezone
from typing import Iterable
from uuid import uuid4

from databases import Database

from domain.models import Recipe


INSERT_RECIPE = """
INSERT INTO recipes (
    id, user_id, title, description, image, prep_time, cook_time,
    ingredients, instructions, is_dalle_image, created_at
) VALUES (
    :id, :user_id, :title, :description, :image, :prep_time, :cook_time,
    :ingredients, :instructions, :is_dalle_image, :created_at
)
"""

UPDATE_RECIPE = """
UPDATE recipes SET
    title = :title, description = :description, image = :image,
    prep_time = :prep_time, cook_time = :cook_time, ingredients = :ingredients,
    instructions = :instructions, is_dalle_image = :is_dalle_image,
    updated_at = :updated_at
WHERE id = :id AND user_id = :user_id
"""

GET_RECIPE = "SELECT * FROM recipes WHERE id = :id"

GET_USER_RECIPE = "SELECT * FROM recipes WHERE id = :id AND user_id = :user_id"

LIST_RECIPES = """
SELECT * FROM recipes WHERE user_id = :user_id ORDER BY created_at DESC
"""

DELETE_RECIPE = "DELETE FROM recipes WHERE id = :id AND user_id = :user_id"

DELETE_RECIPE_FAVORITES = "DELETE FROM favorites WHERE recipe_id = :recipe_id"

DELETE_RECIPE_RECENTS = "DELETE FROM recent_recipes WHERE recipe_id = :recipe_id"

LIST_FAVORITES = """
SELECT recipes.* FROM favorites
JOIN recipes ON recipes.id = favorites.recipe_id
WHERE favorites.user_id = :user_id
ORDER BY favorites.created_at DESC
"""

FIND_FAVORITE = """
SELECT id FROM favorites WHERE user_id = :user_id AND recipe_id = :recipe_id
"""

INSERT_FAVORITE = """
INSERT INTO favorites (id, user_id, recipe_id, created_at)
VALUES (:id, :user_id, :recipe_id, :created_at)
"""

DELETE_FAVORITE = """
DELETE FROM favorites WHERE user_id = :user_id AND recipe_id = :recipe_id
"""

LIST_RECENTS = """
SELECT recipes.* FROM recent_recipes
JOIN recipes ON recipes.id = recent_recipes.recipe_id
WHERE recent_recipes.user_id = :user_id
ORDER BY recent_recipes.position DESC
LIMIT :limit
"""

LIST_RECENT_IDS = """
SELECT id FROM recent_recipes WHERE user_id = :user_id ORDER BY position DESC
"""

LAST_RECENT_POSITION = """
SELECT COALESCE(MAX(position), 0) AS position FROM recent_recipes
WHERE user_id = :user_id
"""

INSERT_RECENT = """
INSERT INTO recent_recipes (id, user_id, recipe_id, position, created_at)
VALUES (:id, :user_id, :recipe_id, :position, :created_at)
"""

DELETE_RECENT = """
DELETE FROM recent_recipes WHERE user_id = :user_id AND recipe_id = :recipe_id
"""

DELETE_RECENT_BY_ID = "DELETE FROM recent_recipes WHERE id = :id"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecipeNotFound(Exception):
    pass


class RecipeCache:
    """Per-user recipe lists, cleared explicitly on writes."""

    def __init__(self) -> None:
        self._recipes: dict[str, list[Recipe]] = {}

    def get(self, user_id: str) -> list[Recipe] | None:
        recipes = self._recipes.get(user_id)
        return None if recipes is None else list(recipes)

    def put(self, user_id: str, recipes: list[Recipe]) -> None:
        self._recipes[user_id] = list(recipes)

    def invalidate(self, user_id: str | None = None) -> None:
        if user_id is None:
            self._recipes.clear()
        else:
            self._recipes.pop(user_id, None)


class RecipesRepository:
    """Recipes repository."""

    def __init__(self, db: Database, *, caches: Iterable[RecipeCache] = ()) -> None:
        self.db = db
        self.caches = tuple(caches)

    async def create(self, recipe: Recipe, *, user_id: str) -> Recipe:
        """Insert the recipe and give it its id."""
        values = recipe.to_dict() | {
            "id": uuid4().hex,
            "user_id": user_id,
            "created_at": _now(),
        }
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            INSERT_RECIPE, values=values
        )
        recipe.id = values["id"]
        return recipe

    async def ensure_saved(self, recipe: Recipe, *, user_id: str) -> str:
        if recipe.id is None:
            await self.create(recipe, user_id=user_id)
        assert recipe.id is not None
        return recipe.id

    async def get(self, id: str) -> Recipe:
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_RECIPE, values={"id": id}
        )
        if result is None:
            raise RecipeNotFound(f"{id}")
        return Recipe.from_record(result)

    async def list(self, *, user_id: str) -> list[Recipe]:
        result = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_RECIPES, values={"user_id": user_id}
        )
        return [Recipe.from_record(r) for r in result]

    async def _get_owned(self, id: str, *, user_id: str) -> None:
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_USER_RECIPE, values={"id": id, "user_id": user_id}
        )
        if result is None:
            raise RecipeNotFound(f"{id}")

    async def update(self, id: str, recipe: Recipe, *, user_id: str) -> Recipe:
        await self._get_owned(id, user_id=user_id)
        values = recipe.to_dict() | {
            "id": id,
            "user_id": user_id,
            "updated_at": _now(),
        }
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            UPDATE_RECIPE, values=values
        )
        for cache in self.caches:
            cache.invalidate(user_id)
        return await self.get(id)

    async def delete(self, id: str, *, user_id: str) -> bool:
        """Delete a recipe the user owns along with its favourite/recent rows."""
        try:
            await self._get_owned(id, user_id=user_id)
        except RecipeNotFound:
            return False

        async with self.db.transaction():
            for query in (DELETE_RECIPE_FAVORITES, DELETE_RECIPE_RECENTS):
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    query, values={"recipe_id": id}
                )
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                DELETE_RECIPE, values={"id": id, "user_id": user_id}
            )

        for cache in self.caches:
            cache.invalidate()
        return True


class FavoritesRepository:
    def __init__(
        self,
        db: Database,
        *,
        recipes: RecipesRepository,
        cache: RecipeCache | None = None,
    ) -> None:
        self.db = db
        self.recipes = recipes
        self.cache = RecipeCache() if cache is None else cache

    async def list(self, *, user_id: str) -> list[Recipe]:
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached

        result = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_FAVORITES, values={"user_id": user_id}
        )
        favorites = [Recipe.from_record(r) for r in result]
        self.cache.put(user_id, favorites)
        return favorites

    async def is_favorite(self, recipe_id: str, *, user_id: str) -> bool:
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            FIND_FAVORITE, values={"user_id": user_id, "recipe_id": recipe_id}
        )
        return result is not None

    async def add(self, recipe: Recipe, *, user_id: str) -> str:
        """Favourite a recipe, saving it first if needed. Returns its id."""
        recipe_id = await self.recipes.ensure_saved(recipe, user_id=user_id)
        if await self.is_favorite(recipe_id, user_id=user_id):
            return recipe_id

        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            INSERT_FAVORITE,
            values={
                "id": uuid4().hex,
                "user_id": user_id,
                "recipe_id": recipe_id,
                "created_at": _now(),
            },
        )
        self.cache.invalidate(user_id)
        return recipe_id

    async def remove(self, recipe_id: str, *, user_id: str) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            DELETE_FAVORITE, values={"user_id": user_id, "recipe_id": recipe_id}
        )
        self.cache.invalidate(user_id)


class RecentRecipesRepository:
    def __init__(
        self,
        db: Database,
        *,
        recipes: RecipesRepository,
        cache: RecipeCache | None = None,
        max_recent: int = 10,
    ) -> None:
        self.db = db
        self.recipes = recipes
        self.cache = RecipeCache() if cache is None else cache
        self.max_recent = max_recent

    async def list(self, *, user_id: str) -> list[Recipe]:
        """Most recent first."""
        cached = self.cache.get(user_id)
        if cached is not None:
            return cached

        result = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
            LIST_RECENTS, values={"user_id": user_id, "limit": self.max_recent}
        )
        recents = [Recipe.from_record(r) for r in result]
        self.cache.put(user_id, recents)
        return recents

    async def add(self, recipe: Recipe, *, user_id: str) -> str:
        """Put a recipe at the top of the recents, saving it first if needed."""
        recipe_id = await self.recipes.ensure_saved(recipe, user_id=user_id)

        async with self.db.transaction():
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                DELETE_RECENT, values={"user_id": user_id, "recipe_id": recipe_id}
            )
            last = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
                LAST_RECENT_POSITION, values={"user_id": user_id}
            )
            position = (last["position"] if last is not None else 0) + 1
            await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                INSERT_RECENT,
                values={
                    "id": uuid4().hex,
                    "user_id": user_id,
                    "recipe_id": recipe_id,
                    "position": position,
                    "created_at": _now(),
                },
            )

            rows = await self.db.fetch_all(  # pyright: ignore[reportUnknownMemberType]
                LIST_RECENT_IDS, values={"user_id": user_id}
            )
            for row in rows[self.max_recent :]:
                await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
                    DELETE_RECENT_BY_ID, values={"id": row["id"]}
                )

        self.cache.invalidate(user_id)
        return recipe_id

    async def remove(self, recipe_id: str, *, user_id: str) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            DELETE_RECENT, values={"user_id": user_id, "recipe_id": recipe_id}
        )
        self.cache.invalidate(user_id)
