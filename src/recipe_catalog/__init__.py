"""Recipe Catalog Service.

CRUD data-access layer for recipes and categories with pagination, filtering,
sorting and soft-delete, exposed over a FastAPI HTTP surface.
"""

__version__ = "0.1.0"
