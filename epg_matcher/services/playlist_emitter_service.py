"""
Playlist rendering

Turns matcher and override results back into extended M3U text.
Every channel is written as two lines: the directive and its stream location.
"""
from collections.abc import Sequence

from epg_matcher.services.channel_types import MappedChannel, MatchOutcome


RESOLVED_SECTION_HEADER = '# CHANNELS WITH EPG'
UNRESOLVED_SECTION_HEADER = '# CHANNELS WITHOUT EPG'
DEFAULT_UNRESOLVED_LIMIT = 10


def render_header(epg_location: str) -> str:
    return f'#EXTM3U url-tvg="{epg_location}"\n'


def render_entry(
    name: str,
    stream_url: str,
    tvg_id: str = '',
    attributes: Sequence[tuple[str, str]] = ()
) -> str:
    """
    Render one playlist entry

    Args:
        name: Display label
        stream_url: Stream location
        tvg_id: Resolved EPG id, omitted when empty
        attributes: Extra directive attributes to carry over

    Returns:
        Directive line and location line, both newline-terminated
    """
    parts = ['#EXTINF:-1']
    if tvg_id:
        parts.append(f'tvg-id="{tvg_id}"')
    parts.extend(f'{key}="{value}"' for key, value in attributes)

    return f"{' '.join(parts)},{name}\n{stream_url}\n"


def render_corrected_playlist(outcome: MatchOutcome, epg_location: str) -> str:
    """
    Render matcher output: matched channels first, then unmatched ones

    Args:
        outcome: Matcher output
        epg_location: EPG resource declared in the header

    Returns:
        Playlist text
    """
    chunks = [render_header(epg_location)]

    for match in outcome.matches:
        chunks.append(render_entry(
            match.playlist_name,
            match.stream_url,
            tvg_id=match.epg_id,
            attributes=match.attributes
        ))

    for channel in outcome.unmatched:
        chunks.append(render_entry(
            channel.name,
            channel.stream_url,
            attributes=channel.attributes
        ))

    return ''.join(chunks)


def render_clean_playlist(
    mapped_channels: Sequence[MappedChannel],
    epg_location: str,
    unresolved_limit: int = DEFAULT_UNRESOLVED_LIMIT
) -> str:
    """
    Render override output in two commented sections

    Only the first ``unresolved_limit`` unresolved channels are written.

    Args:
        mapped_channels: Override resolver output
        epg_location: EPG resource declared in the header
        unresolved_limit: Cap on unresolved entries

    Returns:
        Playlist text
    """
    resolved = [channel for channel in mapped_channels if channel.has_id]
    unresolved = [channel for channel in mapped_channels if not channel.has_id]

    chunks = [render_header(epg_location), '\n', f'{RESOLVED_SECTION_HEADER}\n']

    for channel in resolved:
        chunks.append(render_entry(
            channel.original_name,
            channel.stream_url,
            tvg_id=channel.tvg_id,
            attributes=channel.attributes
        ))

    chunks.append(f'\n{UNRESOLVED_SECTION_HEADER}\n')

    for channel in unresolved[:unresolved_limit]:
        chunks.append(render_entry(
            channel.original_name,
            channel.stream_url,
            attributes=channel.attributes
        ))

    return ''.join(chunks)
