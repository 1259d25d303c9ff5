"""
Reconciliation Pipelines

Two independent programs over the same playlist format:
  - MatchPipeline: fuzzy-match a downloaded playlist against the EPG catalog
  - CleanPipeline: re-map the corrected playlist through the override table

Every input is read in full before any matching, and output is written only
once the whole result has been computed.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import httpx

from epg_matcher.config import settings
from epg_matcher.overrides import DEFAULT_OVERRIDES
from epg_matcher.services.channel_types import MappedChannel, MatchOutcome
from epg_matcher.services.matcher_service import match_channels
from epg_matcher.services.override_service import OverrideResolver, resolve_channels
from epg_matcher.services.playlist_emitter_service import (
    render_clean_playlist,
    render_corrected_playlist,
)
from epg_matcher.services.playlist_parser_service import parse_playlist
from epg_matcher.services.xmltv_parser_service import parse_xmltv_channels
from epg_matcher.utils.file_operations import (
    fetch_text,
    read_file_bytes,
    read_text_file,
    write_text_atomic,
)
from epg_matcher.utils.logging_helpers import (
    log_clean_report,
    log_match_report,
    log_section_end,
    log_section_start,
)


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchSummary:
    started_at: datetime
    completed_at: datetime
    output_path: Path
    playlist_channels: int
    epg_channels: int
    outcome: MatchOutcome

    @property
    def duration_seconds(self) -> float:
        return max(0.0, (self.completed_at - self.started_at).total_seconds())

    def to_dict(self) -> dict:
        return {
            "output_path": str(self.output_path),
            "playlist_channels": self.playlist_channels,
            "epg_channels": self.epg_channels,
            "matched": len(self.outcome.matches),
            "unmatched": len(self.outcome.unmatched),
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "duration_seconds": self.duration_seconds,
        }


@dataclass(slots=True)
class CleanSummary:
    started_at: datetime
    completed_at: datetime
    output_path: Path
    mapped: list[MappedChannel] = field(default_factory=list)

    @property
    def resolved_count(self) -> int:
        return sum(1 for channel in self.mapped if channel.has_id)

    @property
    def unresolved_count(self) -> int:
        return len(self.mapped) - self.resolved_count

    def to_dict(self) -> dict:
        return {
            "output_path": str(self.output_path),
            "channels": len(self.mapped),
            "resolved": self.resolved_count,
            "unresolved": self.unresolved_count,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
        }


class MatchPipeline:
    """Downloads the playlist, reads the catalog, matches and writes the corrected playlist."""

    def __init__(
        self,
        *,
        playlist_url: str | None = None,
        epg_path: Path | str | None = None,
        output_path: Path | str | None = None,
        threshold: float | None = None,
        fetch_timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None
    ) -> None:
        self.playlist_url = playlist_url or settings.playlist_url
        self.epg_path = Path(epg_path or settings.epg_path)
        self.output_path = Path(output_path or settings.corrected_playlist_path)
        self.threshold = settings.match_threshold if threshold is None else threshold
        self.fetch_timeout = settings.fetch_timeout_sec if fetch_timeout is None else fetch_timeout
        self._http_client = http_client

    async def run(self) -> MatchSummary:
        started_at = datetime.now(timezone.utc)

        log_section_start(logger, "input retrieval")
        playlist_text = await fetch_text(
            self.playlist_url,
            timeout=self.fetch_timeout,
            client=self._http_client
        )
        epg_content = await read_file_bytes(self.epg_path)
        log_section_end(logger, "input retrieval")

        logger.info("Parsing playlist...")
        playlist_channels = parse_playlist(playlist_text)

        logger.info("Parsing EPG...")
        epg_channels = parse_xmltv_channels(epg_content)

        logger.info("Matching channels...")
        outcome = match_channels(playlist_channels, epg_channels, threshold=self.threshold)

        log_match_report(logger, len(playlist_channels), len(epg_channels), outcome)

        content = render_corrected_playlist(outcome, self.epg_path.as_posix())
        await write_text_atomic(self.output_path, content)
        logger.info(f"Generated: {self.output_path}")

        return MatchSummary(
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            output_path=self.output_path,
            playlist_channels=len(playlist_channels),
            epg_channels=len(epg_channels),
            outcome=outcome,
        )


class CleanPipeline:
    """Reads the corrected playlist, applies overrides and writes the clean playlist."""

    def __init__(
        self,
        *,
        overrides: Mapping[str, str] | None = None,
        input_path: Path | str | None = None,
        output_path: Path | str | None = None,
        epg_location: str | None = None,
        unresolved_limit: int | None = None,
        report_limit: int | None = None,
        report_exclude: Sequence[str] | None = None
    ) -> None:
        self.resolver = OverrideResolver(DEFAULT_OVERRIDES if overrides is None else overrides)
        self.input_path = Path(input_path or settings.corrected_playlist_path)
        self.output_path = Path(output_path or settings.clean_playlist_path)
        self.epg_location = epg_location or Path(settings.epg_path).as_posix()
        self.unresolved_limit = (
            settings.unresolved_output_limit if unresolved_limit is None else unresolved_limit
        )
        self.report_limit = settings.unresolved_report_limit if report_limit is None else report_limit
        self.report_exclude = list(
            settings.unresolved_report_exclude if report_exclude is None else report_exclude
        )

    async def run(self) -> CleanSummary:
        started_at = datetime.now(timezone.utc)

        playlist_text = await read_text_file(self.input_path)

        logger.info("Applying manual mappings...")
        playlist_channels = parse_playlist(playlist_text)
        mapped = resolve_channels(playlist_channels, self.resolver)

        log_clean_report(logger, mapped, self.report_limit, self.report_exclude)

        content = render_clean_playlist(mapped, self.epg_location, self.unresolved_limit)
        await write_text_atomic(self.output_path, content)
        logger.info(f"Generated: {self.output_path}")

        return CleanSummary(
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            output_path=self.output_path,
            mapped=mapped,
        )
