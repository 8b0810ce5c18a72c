"""Console application entry point."""

import asyncio
import logging
import os
import sys

import structlog

from ipa_master.cli.app import GameApp
from ipa_master.cli.console import red
from ipa_master.config import Settings, get_settings
from ipa_master.errors import EmptyWordPool
from ipa_master.storage.profile_store import ProfileStore
from ipa_master.words.dictionary import WordSource


def configure_logging(settings: Settings) -> None:
    """Send structlog output to the log file so it stays out of the game screen."""
    is_production = os.getenv("ENV", "development").lower() == "production"
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    log_path = settings.resolved_log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_file = open(log_path, "a", encoding="utf-8")

    if is_production:
        # Production: JSON format for machine parsing
        renderer = structlog.processors.JSONRenderer()
    else:
        # Development: console format for human readability
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=log_file),
        cache_logger_on_first_use=True,
    )


def build_app(settings: Settings) -> GameApp:
    """Load the dictionary and wire the app's collaborators."""
    word_source = WordSource(settings.resolved_dictionary_path)
    word_source.load_words()
    store = ProfileStore(
        settings.resolved_data_dir,
        namespace=settings.store_namespace,
        default_name=settings.player_name,
    )
    return GameApp(settings, word_source, store)


def main() -> None:
    """Run the game."""
    settings = get_settings()
    configure_logging(settings)
    logger = structlog.get_logger()

    try:
        app = build_app(settings)
    except (FileNotFoundError, EmptyWordPool) as e:
        logger.error("startup_failed", error=str(e))
        print(red(f"❌ Error: {e}"), file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(app.run())
    except KeyboardInterrupt:
        print()
    logger.info("app_exited")


if __name__ == "__main__":
    main()
