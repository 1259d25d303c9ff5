"""
Pipeline tests for the matching and override passes.
"""
import httpx
import pytest

from epg_matcher.exceptions import CatalogParseError, RetrievalError
from epg_matcher.services.reconcile_service import CleanPipeline, MatchPipeline


PLAYLIST_URL = "https://playlists.example.com/fr.m3u"

PLAYLIST_TEXT = """#EXTM3U
#EXTINF:-1,TF1
http://streams.example.com/tf1.m3u8
#EXTINF:-1,Unknown Channel X
http://streams.example.com/x.m3u8
"""


def _client(status_code: int = 200, text: str = PLAYLIST_TEXT) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == PLAYLIST_URL
        return httpx.Response(status_code, text=text)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _failing_client() -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def epg_file(tmp_path):
    path = tmp_path / "fr_epg.xml"
    path.write_bytes(b'<tv><channel id="TF1.fr"><display-name>TF1</display-name></channel></tv>')
    return path


class TestMatchPipeline:
    """Test the fuzzy matching pass end to end."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, tmp_path, epg_file):
        output = tmp_path / "fr_corrected.m3u"
        async with _client() as client:
            pipeline = MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=epg_file,
                output_path=output,
                threshold=0.6,
                http_client=client,
            )
            summary = await pipeline.run()

        assert summary.playlist_channels == 2
        assert summary.epg_channels == 1
        assert [match.epg_id for match in summary.outcome.matches] == ["TF1.fr"]
        assert summary.outcome.matches[0].score == 1.0
        assert [channel.name for channel in summary.outcome.unmatched] == ["Unknown Channel X"]

        assert output.read_text(encoding="utf-8") == (
            f'#EXTM3U url-tvg="{epg_file.as_posix()}"\n'
            '#EXTINF:-1 tvg-id="TF1.fr",TF1\n'
            'http://streams.example.com/tf1.m3u8\n'
            '#EXTINF:-1,Unknown Channel X\n'
            'http://streams.example.com/x.m3u8\n'
        )
        assert summary.to_dict()["matched"] == 1
        assert list(tmp_path.glob("*.tmp")) == []

    @pytest.mark.asyncio
    async def test_http_error_aborts_without_output(self, tmp_path, epg_file):
        output = tmp_path / "fr_corrected.m3u"
        async with _client(status_code=404) as client:
            pipeline = MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=epg_file,
                output_path=output,
                http_client=client,
            )
            with pytest.raises(RetrievalError) as exc_info:
                await pipeline.run()

        assert "404" in str(exc_info.value)
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_connection_error_aborts(self, tmp_path, epg_file):
        output = tmp_path / "fr_corrected.m3u"
        async with _failing_client() as client:
            pipeline = MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=epg_file,
                output_path=output,
                http_client=client,
            )
            with pytest.raises(RetrievalError):
                await pipeline.run()

        assert not output.exists()

    @pytest.mark.asyncio
    async def test_missing_epg_file_aborts(self, tmp_path):
        output = tmp_path / "fr_corrected.m3u"
        async with _client() as client:
            pipeline = MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=tmp_path / "missing.xml",
                output_path=output,
                http_client=client,
            )
            with pytest.raises(RetrievalError):
                await pipeline.run()

        assert not output.exists()

    @pytest.mark.asyncio
    async def test_malformed_epg_keeps_previous_output(self, tmp_path):
        epg = tmp_path / "broken.xml"
        epg.write_bytes(b"<tv><channel id='TF1.fr'>")
        output = tmp_path / "fr_corrected.m3u"
        output.write_text("previous run\n", encoding="utf-8")

        async with _client() as client:
            pipeline = MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=epg,
                output_path=output,
                http_client=client,
            )
            with pytest.raises(CatalogParseError):
                await pipeline.run()

        assert output.read_text(encoding="utf-8") == "previous run\n"


class TestCleanPipeline:
    """Test the override pass end to end."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, tmp_path):
        corrected = tmp_path / "fr_corrected.m3u"
        corrected.write_text(
            '#EXTM3U url-tvg="fr_epg.xml"\n'
            '#EXTINF:-1 tvg-id="TF1.fr",TF1 HD (1080p)\n'
            'http://s/tf1\n'
            '#EXTINF:-1,Pluto TV Cinema\n'
            'http://s/pluto\n'
            '#EXTINF:-1,Arte [Geo-blocked]\n'
            'http://s/arte\n',
            encoding="utf-8",
        )
        output = tmp_path / "fr_clean.m3u"

        pipeline = CleanPipeline(
            overrides={"TF1 HD": "TF1.fr", "Arte": "Arte.fr"},
            input_path=corrected,
            output_path=output,
            epg_location="fr_epg.xml",
            unresolved_limit=10,
            report_limit=15,
            report_exclude=["Pluto TV"],
        )
        summary = await pipeline.run()

        assert summary.resolved_count == 2
        assert summary.unresolved_count == 1
        assert output.read_text(encoding="utf-8") == (
            '#EXTM3U url-tvg="fr_epg.xml"\n'
            '\n'
            '# CHANNELS WITH EPG\n'
            '#EXTINF:-1 tvg-id="TF1.fr",TF1 HD (1080p)\n'
            'http://s/tf1\n'
            '#EXTINF:-1 tvg-id="Arte.fr",Arte [Geo-blocked]\n'
            'http://s/arte\n'
            '\n'
            '# CHANNELS WITHOUT EPG\n'
            '#EXTINF:-1,Pluto TV Cinema\n'
            'http://s/pluto\n'
        )

    @pytest.mark.asyncio
    async def test_missing_input_aborts(self, tmp_path):
        output = tmp_path / "fr_clean.m3u"
        pipeline = CleanPipeline(
            overrides={},
            input_path=tmp_path / "missing.m3u",
            output_path=output,
        )
        with pytest.raises(RetrievalError):
            await pipeline.run()
        assert not output.exists()

    @pytest.mark.asyncio
    async def test_every_channel_is_accounted_for(self, tmp_path, epg_file):
        corrected = tmp_path / "fr_corrected.m3u"
        async with _client() as client:
            await MatchPipeline(
                playlist_url=PLAYLIST_URL,
                epg_path=epg_file,
                output_path=corrected,
                http_client=client,
            ).run()

        summary = await CleanPipeline(
            overrides={"TF1": "TF1.fr"},
            input_path=corrected,
            output_path=tmp_path / "fr_clean.m3u",
        ).run()

        assert [channel.original_name for channel in summary.mapped] == ["TF1", "Unknown Channel X"]
        assert summary.resolved_count + summary.unresolved_count == 2
