from databases import Database

import config


CREATE_RECIPES_TABLE = """
CREATE TABLE IF NOT EXISTS recipes (
    id VARCHAR(64) PRIMARY KEY,
    user_id VARCHAR(64) NOT NULL,
    title VARCHAR(256) NOT NULL,
    description TEXT NOT NULL,
    image TEXT NOT NULL,
    prep_time VARCHAR(64) NOT NULL,
    cook_time VARCHAR(64) NOT NULL,
    ingredients TEXT NOT NULL,
    instructions TEXT NOT NULL,
    is_dalle_image BOOLEAN NOT NULL,
    created_at VARCHAR(32) NOT NULL,
    updated_at VARCHAR(32)
)
"""


CREATE_FAVORITES_TABLE = """
CREATE TABLE IF NOT EXISTS favorites (
    id VARCHAR(64) PRIMARY KEY,
    user_id VARCHAR(64) NOT NULL,
    recipe_id VARCHAR(64) NOT NULL REFERENCES recipes (id),
    created_at VARCHAR(32) NOT NULL
)
"""


CREATE_RECENT_RECIPES_TABLE = """
CREATE TABLE IF NOT EXISTS recent_recipes (
    id VARCHAR(64) PRIMARY KEY,
    user_id VARCHAR(64) NOT NULL,
    recipe_id VARCHAR(64) NOT NULL REFERENCES recipes (id),
    position INTEGER NOT NULL,
    created_at VARCHAR(32) NOT NULL
)
"""


def database(cfg: config.Config | None = None) -> Database:
    cfg = config.Config() if cfg is None else cfg
    return Database(cfg.db_url)


async def create_db(db: Database) -> None:
    for query in (
        CREATE_RECIPES_TABLE,
        CREATE_FAVORITES_TABLE,
        CREATE_RECENT_RECIPES_TABLE,
    ):
        await db.execute(query=query)  # pyright: ignore[reportUnknownMemberType]
