"""
Override Service

Resolves playlist channels through a curated name -> id table.
Lookups are exact and case-sensitive; no similarity scoring is involved.
"""
import logging
import re
from collections.abc import Mapping, Sequence

from epg_matcher.services.channel_types import MappedChannel, PlaylistChannel


logger = logging.getLogger(__name__)

_PAREN_GROUP = re.compile(r'\s*\([^)]*\)')
_BRACKET_GROUP = re.compile(r'\s*\[[^\]]*\]')


def clean_channel_name(name: str) -> str:
    """
    Strip "(...)" and "[...]" annotations from a display name

    "TF1 HD (1080p)" -> "TF1 HD", "Arte [Geo-blocked]" -> "Arte"

    Args:
        name: Display name as authored

    Returns:
        Name without annotations, surrounding whitespace trimmed
    """
    cleaned = _PAREN_GROUP.sub('', name)
    cleaned = _BRACKET_GROUP.sub('', cleaned)
    return cleaned.strip()


class OverrideResolver:
    """Looks channels up in an injected override table."""

    def __init__(self, overrides: Mapping[str, str]) -> None:
        self.overrides = dict(overrides)

    def lookup(self, clean_name: str, original_name: str) -> str | None:
        """Try the cleaned name first, then the name as authored"""
        return self.overrides.get(clean_name) or self.overrides.get(original_name) or None

    def resolve(self, channel: PlaylistChannel) -> str | None:
        return self.lookup(clean_channel_name(channel.name), channel.name)


def resolve_channels(
    playlist_channels: Sequence[PlaylistChannel],
    resolver: OverrideResolver
) -> list[MappedChannel]:
    """
    Apply override lookups to every playlist channel

    Args:
        playlist_channels: Parsed playlist entries
        resolver: Override resolver holding the table

    Returns:
        One MappedChannel per input channel, in input order
    """
    mapped = []

    for channel in playlist_channels:
        clean_name = clean_channel_name(channel.name)
        tvg_id = resolver.lookup(clean_name, channel.name) or ""

        if tvg_id:
            logger.debug(f"Override hit: '{channel.name}' -> {tvg_id}")
        else:
            logger.debug(f"No override for '{clean_name}'")

        mapped.append(MappedChannel(
            original_name=channel.name,
            clean_name=clean_name,
            tvg_id=tvg_id,
            stream_url=channel.stream_url,
            attributes=channel.attributes
        ))

    resolved = sum(1 for channel in mapped if channel.has_id)
    logger.info(f"Override lookup complete: {resolved} resolved, {len(mapped) - resolved} unresolved")

    return mapped
