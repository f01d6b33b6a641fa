"""Sample catalog data for local development."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_catalog.database.connection import get_database_pool
from recipe_catalog.observability.logging import get_logger


if TYPE_CHECKING:
    from asyncpg import Pool

logger = get_logger(__name__)

SAMPLE_CATEGORIES: list[tuple[str, str]] = [
    ("Breakfast", "Recipes for a healthy breakfast"),
    ("Lunch", "Quick and easy lunch recipes"),
    ("Dinner", "Main courses for the evening"),
    ("Dessert", "Sweet treats and puddings"),
    ("Vegetarian", "Meat-free dishes"),
]

# title, description, ingredients, instructions, prep, cook, servings, difficulty, category
SAMPLE_RECIPES: list[tuple[str, str, str, str, int, int, int, str, str]] = [
    (
        "Pancakes",
        "Thin pancakes, Dutch style",
        "250g flour, 2 eggs, 500ml milk, pinch of salt, butter",
        "1. Whisk everything into a smooth batter. 2. Rest for 10 minutes. "
        "3. Fry in a hot buttered pan. 4. Flip after 2 minutes.",
        10, 15, 4, "easy", "Breakfast",
    ),
    (
        "Overnight Oats",
        "Oats that are ready when you wake up",
        "100g rolled oats, 200ml almond milk, 1 tbsp chia seeds, honey, fresh fruit",
        "1. Mix oats, milk and chia. 2. Sweeten with honey. "
        "3. Leave in the fridge overnight. 4. Top with fresh fruit.",
        5, 0, 2, "easy", "Breakfast",
    ),
    (
        "Tomato Soup",
        "Creamy soup with fresh tomatoes",
        "1kg tomatoes, 1 onion, 2 cloves garlic, basil, cream, stock",
        "1. Soften onion and garlic. 2. Add tomatoes and stock. "
        "3. Simmer 20 minutes. 4. Blend and stir in the cream.",
        10, 25, 4, "easy", "Lunch",
    ),
    (
        "Spaghetti Bolognese",
        "Classic Italian pasta",
        "400g spaghetti, 500g minced beef, 400g tomatoes, onion, garlic, carrot, celery",
        "1. Brown the mince with onion and garlic. 2. Add the vegetables. "
        "3. Add tomatoes and simmer 30 minutes. 4. Cook the pasta.",
        15, 45, 4, "easy", "Dinner",
    ),
    (
        "Beef Bourguignon",
        "French stew braised in red wine",
        "1kg beef, 750ml red wine, 200g bacon lardons, mushrooms, carrots",
        "1. Sear the beef. 2. Fry bacon and vegetables. "
        "3. Add wine and herbs. 4. Braise for 2 to 3 hours.",
        30, 180, 6, "hard", "Dinner",
    ),
    (
        "Tiramisu",
        "Italian coffee dessert",
        "500g mascarpone, 4 eggs, 100g sugar, ladyfingers, espresso, cocoa powder",
        "1. Make the mascarpone cream. 2. Dip the biscuits in coffee. "
        "3. Build the layers. 4. Chill for 4 hours.",
        30, 0, 8, "medium", "Dessert",
    ),
    (
        "Shakshuka",
        "Eggs poached in spiced tomato sauce",
        "400g tomatoes, 4 eggs, pepper, onion, garlic, cumin, feta",
        "1. Fry onion, pepper and garlic. 2. Add tomatoes and spices. "
        "3. Make wells for the eggs. 4. Poach until set.",
        10, 20, 2, "easy", "Vegetarian",
    ),
]


async def seed_sample_data(pool: Pool | None = None) -> bool:
    """Insert the sample categories and recipes into an empty catalog.

    Returns:
        True if data was inserted, False if the catalog already had recipes.
    """
    pool = pool or get_database_pool()

    async with pool.acquire() as conn:
        if await conn.fetchval("SELECT COUNT(*) FROM recipes"):
            logger.info("Recipes already present, skipping seed")
            return False

        async with conn.transaction():
            category_ids: dict[str, int] = {}
            for name, description in SAMPLE_CATEGORIES:
                category_id = await conn.fetchval(
                    """
                    INSERT INTO categories (name, description)
                    VALUES ($1, $2)
                    ON CONFLICT (name) WHERE deleted_at IS NULL
                    DO UPDATE SET description = EXCLUDED.description
                    RETURNING id
                    """,
                    name,
                    description,
                )
                category_ids[name] = category_id

            await conn.executemany(
                """
                INSERT INTO recipes (
                    title, description, ingredients, instructions,
                    prep_time, cook_time, servings, difficulty, category_id
                )
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
                """,
                [(*recipe[:8], category_ids[recipe[8]]) for recipe in SAMPLE_RECIPES],
            )

    logger.info(
        "Seeded sample data",
        categories=len(SAMPLE_CATEGORIES),
        recipes=len(SAMPLE_RECIPES),
    )
    return True
