"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_extractor.main:app --reload

    # Or through the installed script
    recipe-extractor
"""

from recipe_extractor.factory import create_app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    from recipe_extractor.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_extractor.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
