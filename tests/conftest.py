import pytest

from epg_matcher.services.channel_types import EpgChannel, PlaylistChannel


FRENCH_CATALOG = b"""<?xml version="1.0" encoding="UTF-8"?>
<tv generator-info-name="test">
  <channel id="TF1.fr">
    <display-name lang="fr">TF1</display-name>
    <icon src="http://example.com/tf1.png"/>
  </channel>
  <channel id="France2.fr">
    <display-name lang="fr">France 2</display-name>
    <display-name lang="en">France Two</display-name>
  </channel>
  <channel id="M6.fr">
    <display-name>M6</display-name>
  </channel>
  <programme start="20251009000000 +0000" stop="20251009010000 +0000" channel="TF1.fr">
    <title>News</title>
  </programme>
</tv>
"""


@pytest.fixture
def french_catalog() -> bytes:
    return FRENCH_CATALOG


@pytest.fixture
def make_channel():
    def _make(name: str, tvg_id: str = "", stream_url: str | None = None) -> PlaylistChannel:
        return PlaylistChannel(
            name=name,
            tvg_id=tvg_id,
            stream_url=stream_url or f"http://streams.example.com/{len(name)}.m3u8",
        )
    return _make


@pytest.fixture
def epg_channels() -> list[EpgChannel]:
    return [
        EpgChannel(id="TF1.fr", display_name="TF1"),
        EpgChannel(id="France2.fr", display_name="France 2"),
        EpgChannel(id="M6.fr", display_name="M6"),
    ]
