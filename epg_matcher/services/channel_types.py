"""
Shared dataclasses used across the matching and override pipelines.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True, frozen=True)
class PlaylistChannel:
    """One playlist entry: directive line plus stream location."""
    name: str
    tvg_id: str
    stream_url: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(slots=True, frozen=True)
class EpgChannel:
    """Channel record taken from an XMLTV catalog."""
    id: str
    display_name: str


@dataclass(slots=True, frozen=True)
class MatchResult:
    """Playlist channel paired with its best-scoring EPG channel."""
    playlist_name: str
    playlist_tvg_id: str
    epg_id: str
    epg_name: str
    score: float
    stream_url: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(slots=True, frozen=True)
class MatchOutcome:
    """Matcher output, both lists in playlist order."""
    matches: list[MatchResult] = field(default_factory=list)
    unmatched: list[PlaylistChannel] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class MappedChannel:
    """Playlist channel after the override lookup."""
    original_name: str
    clean_name: str
    tvg_id: str
    stream_url: str
    attributes: tuple[tuple[str, str], ...] = ()

    @property
    def has_id(self) -> bool:
        return bool(self.tvg_id)


class ChannelResolver(Protocol):
    """Anything that can turn a playlist channel into a canonical id."""

    def resolve(self, channel: PlaylistChannel) -> str | None:
        ...


__all__ = [
    "PlaylistChannel",
    "EpgChannel",
    "MatchResult",
    "MatchOutcome",
    "MappedChannel",
    "ChannelResolver",
]
