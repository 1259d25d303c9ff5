import asyncio
import logging

from pydantic import ValidationError

from epg_matcher.exceptions import CatalogParseError, RetrievalError
from epg_matcher.utils.logging_helpers import LOG_DATE_FORMAT, LOG_FORMAT


logger = logging.getLogger(__name__)


def _load_settings():
    """Import the settings singleton and configure logging from it.

    Settings are validated when epg_matcher.config is first imported, so the
    import happens here where a bad environment can be reported.
    Returns None when validation fails.
    """
    try:
        from epg_matcher.config import settings, setup_logging
    except ValidationError as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        logger.error(f"Invalid configuration: {e}")
        return None

    setup_logging()
    return settings


def _log_match_hint(settings) -> None:
    logger.info("Make sure you have:")
    logger.info(f"- network access to {settings.playlist_url} (the source playlist)")
    logger.info(f"- {settings.epg_path} (generated EPG file)")


def _log_clean_hint(settings) -> None:
    logger.info("Make sure you have:")
    logger.info(f"- {settings.corrected_playlist_path} (run epg-match first)")


def run_match() -> int:
    """Fuzzy-match the playlist against the EPG and write the corrected playlist"""
    settings = _load_settings()
    if settings is None:
        return 1

    from epg_matcher.services import reconcile_service

    logger.info("Starting EPG playlist matching...")

    try:
        summary = asyncio.run(reconcile_service.MatchPipeline().run())
    except RetrievalError as e:
        logger.error(f"Error: {e}")
        _log_match_hint(settings)
        return 1
    except CatalogParseError as e:
        logger.error(f"Error: {e}")
        return 1
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1

    logger.info("This playlist has proper tvg-id mappings for matched channels")
    logger.debug(f"Run details: {summary.to_dict()}")
    return 0


def run_clean() -> int:
    """Apply manual mappings to the corrected playlist and write the clean playlist"""
    settings = _load_settings()
    if settings is None:
        return 1

    from epg_matcher.services import reconcile_service

    logger.info("Starting manual mapping pass...")

    try:
        summary = asyncio.run(reconcile_service.CleanPipeline().run())
    except RetrievalError as e:
        logger.error(f"Error: {e}")
        _log_clean_hint(settings)
        return 1
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1

    logger.info("This contains only properly mapped channels")
    logger.debug(f"Run details: {summary.to_dict()}")
    return 0


def main_match() -> None:
    raise SystemExit(run_match())


def main_clean() -> None:
    raise SystemExit(run_clean())


if __name__ == "__main__":
    main_match()
