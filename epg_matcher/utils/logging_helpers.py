"""
Structured logging helpers for the run summaries.

Provides the console report of each pass without decorative separators.
"""
import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from epg_matcher.services.channel_types import MappedChannel, MatchOutcome


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_section_start(logger: logging.Logger, section_name: str) -> None:
    """
    Log the start of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being started
    """
    logger.info(f"Starting: {section_name}")


def log_section_end(logger: logging.Logger, section_name: str) -> None:
    """
    Log the end of a processing section.

    Args:
        logger: Logger instance
        section_name: Name of the section being ended
    """
    logger.info(f"Completed: {section_name}")


def format_score_percent(score: float) -> str:
    """Score as a whole percentage, halves rounded up"""
    return f"{math.floor(score * 100 + 0.5)}%"


def log_match_report(
    logger: logging.Logger,
    playlist_count: int,
    epg_count: int,
    outcome: "MatchOutcome"
) -> None:
    """
    Log the fuzzy matching summary.

    Args:
        logger: Logger instance
        playlist_count: Parsed playlist channels
        epg_count: Parsed EPG channels
        outcome: Matcher output
    """
    logger.info(f"Playlist channels: {playlist_count}")
    logger.info(f"EPG channels: {epg_count}")
    logger.info(f"Matched: {len(outcome.matches)}")
    logger.info(f"Unmatched: {len(outcome.unmatched)}")

    logger.info("Matches:")
    for match in outcome.matches:
        logger.info(
            f"  {match.playlist_name} -> {match.epg_name} ({match.epg_id}) "
            f"[{format_score_percent(match.score)}]"
        )

    logger.info("Unmatched:")
    for channel in outcome.unmatched:
        logger.info(f"  {channel.name} (no EPG match)")


def log_clean_report(
    logger: logging.Logger,
    mapped_channels: Sequence["MappedChannel"],
    report_limit: int,
    exclude: Sequence[str] = ()
) -> None:
    """
    Log the override summary.

    Unresolved channels whose cleaned name contains one of ``exclude`` are
    left out of the listing; at most ``report_limit`` are shown.

    Args:
        logger: Logger instance
        mapped_channels: Override resolver output
        report_limit: Cap on listed unresolved channels
        exclude: Substrings that hide an unresolved channel from the listing
    """
    resolved = [channel for channel in mapped_channels if channel.has_id]
    unresolved = [channel for channel in mapped_channels if not channel.has_id]

    logger.info(f"Channels with EPG: {len(resolved)}")
    logger.info(f"Channels without EPG: {len(unresolved)}")

    logger.info("Channels with EPG:")
    for channel in resolved:
        logger.info(f"  {channel.clean_name} -> {channel.tvg_id}")

    listed = [
        channel for channel in unresolved
        if not any(marker in channel.clean_name for marker in exclude)
    ][:report_limit]

    logger.info("Major channels without EPG:")
    for channel in listed:
        logger.info(f"  {channel.clean_name} (needs manual mapping)")
