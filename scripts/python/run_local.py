"""Run the service locally with auto-reload."""

import os

import uvicorn


def main() -> None:
    """Run the server in local configuration."""
    os.environ.setdefault("APP_ENV", "local")
    uvicorn.run("recipe_catalog.main:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    main()
