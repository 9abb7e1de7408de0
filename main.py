import asyncio
import logging

from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

import config
import db
from domain.llm_service import LLMService
from domain.models import Recipe
from domain.repository import (
    FavoritesRepository,
    RecentRecipesRepository,
    RecipeCache,
    RecipesRepository,
)
from domain.services import create_recipe, toggle_favorite


logger = logging.getLogger(__name__)


CONFIG = config.Config()


def render(recipe: Recipe) -> Panel:
    ingredients = "\n".join(f"• {escape(i)}" for i in recipe.ingredients)
    instructions = "\n".join(
        f"{n}. {escape(s)}" for n, s in enumerate(recipe.instructions, 1)
    )
    body = (
        f"{escape(recipe.description)}\n\n"
        f"⏰ Prep: {recipe.prep_time}  Cook: {recipe.cook_time}\n\n"
        f"[bold]Ingredients[/bold]\n{ingredients}\n\n"
        f"[bold]Instructions[/bold]\n{instructions}\n\n"
        f"[dim]{recipe.image}[/dim]"
    )
    return Panel(body, title=f"[bold]{escape(recipe.title)}[/bold]")


def print_titles(recipes: list[Recipe]) -> None:
    if not recipes:
        print("Nothing here yet.")
    for recipe in recipes:
        print(f"- {escape(recipe.title)} ({recipe.cook_time})")


async def main() -> None:
    logging.basicConfig(
        level=CONFIG.log_level,
        format="%(message)s",
        handlers=[RichHandler()],
    )

    database = db.database(CONFIG)
    await database.connect()
    await db.create_db(database)

    favorites_cache, recents_cache = RecipeCache(), RecipeCache()
    recipes = RecipesRepository(database, caches=(favorites_cache, recents_cache))
    favorites = FavoritesRepository(database, recipes=recipes, cache=favorites_cache)
    recents = RecentRecipesRepository(
        database,
        recipes=recipes,
        cache=recents_cache,
        max_recent=CONFIG.max_recent_recipes,
    )
    llm = LLMService(CONFIG)
    user_id = CONFIG.user_id

    try:
        while True:
            msg = input("Ingredients (f: favourites, r: recent, q: quit): ").strip()
            if msg.lower() in ("q", "quit", "exit"):
                break
            if msg.lower() == "f":
                print_titles(await favorites.list(user_id=user_id))
                continue
            if msg.lower() == "r":
                print_titles(await recents.list(user_id=user_id))
                continue
            if not msg:
                continue

            try:
                recipe = await create_recipe(msg, llm=llm)
                await recents.add(recipe, user_id=user_id)
            except Exception:
                logger.exception("Recipe generation failed.")
                print("[red]Failed to generate recipe. Please try again.[/red]")
                continue

            print(render(recipe))
            if input("Save to favourites? [y/N] ").strip().lower() == "y":
                await toggle_favorite(recipe, user_id=user_id, favorites=favorites)
                print("Saved.")
    finally:
        await llm.close()
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
