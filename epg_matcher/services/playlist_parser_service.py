"""
Extended M3U playlist parsing
"""
import logging
import re

from epg_matcher.services.channel_types import PlaylistChannel


logger = logging.getLogger(__name__)

DIRECTIVE_PREFIX = '#EXTINF:'

_TVG_ID = re.compile(r'tvg-id="([^"]*)"')
_ATTRIBUTE = re.compile(r'([\w-]+)="([^"]*)"')


def parse_playlist(content: str) -> list[PlaylistChannel]:
    """
    Parse extended M3U text into playlist channels

    An entry is a "#EXTINF:" line followed by its stream location. Blank
    lines and "#" option lines such as "#EXTVLCOPT:" between the two are
    passed over. The display name is everything after the first comma of
    the directive. Entries without a name or location are skipped.

    Args:
        content: Playlist text

    Returns:
        Channels in playlist order
    """
    lines = content.split('\n')
    channels = []
    skipped = 0

    for index, raw_line in enumerate(lines):
        line = raw_line.strip()
        if not line.startswith(DIRECTIVE_PREFIX):
            continue

        head, comma, tail = line.partition(',')
        name = tail.strip() if comma else ''
        stream_url = _find_location(lines, index + 1)

        if not name or not stream_url:
            logger.debug(f"Skipping incomplete entry on line {index + 1}: {line}")
            skipped += 1
            continue

        tvg_match = _TVG_ID.search(line)
        channels.append(PlaylistChannel(
            name=name,
            tvg_id=tvg_match.group(1) if tvg_match else '',
            stream_url=stream_url,
            attributes=_parse_attributes(head)
        ))

    logger.info(f"Playlist parsing complete: {len(channels)} channels ({skipped} incomplete entries skipped)")

    return channels


def _find_location(lines: list[str], start: int) -> str:
    """First non-comment line after a directive, empty if the next directive comes first"""
    for raw_line in lines[start:]:
        line = raw_line.strip()
        if line.startswith(DIRECTIVE_PREFIX):
            return ''
        if line and not line.startswith('#'):
            return line
    return ''


def _parse_attributes(head: str) -> tuple[tuple[str, str], ...]:
    """Collect quoted attributes of a directive, tvg-id excluded"""
    return tuple(
        (key, value)
        for key, value in _ATTRIBUTE.findall(head)
        if key != 'tvg-id'
    )
