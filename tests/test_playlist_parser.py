"""
Unit tests for extended M3U parsing.
"""
from epg_matcher.services.playlist_parser_service import parse_playlist


SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="TF1.fr" tvg-logo="http://logo.example.com/tf1.png" group-title="General",TF1 HD (1080p)
http://streams.example.com/tf1.m3u8
#EXTINF:-1,Unknown Channel X
http://streams.example.com/x.m3u8
#EXTINF:-1 tvg-id="",
http://streams.example.com/noname.m3u8
#EXTINF:-1,Dangling"""


class TestParsePlaylist:
    """Test entry extraction and skipping rules."""

    def test_sample_playlist(self):
        channels = parse_playlist(SAMPLE_PLAYLIST)

        assert [channel.name for channel in channels] == ["TF1 HD (1080p)", "Unknown Channel X"]
        assert channels[0].tvg_id == "TF1.fr"
        assert channels[0].stream_url == "http://streams.example.com/tf1.m3u8"
        assert channels[1].tvg_id == ""
        assert channels[1].stream_url == "http://streams.example.com/x.m3u8"

    def test_attributes_preserved_without_tvg_id(self):
        channels = parse_playlist(SAMPLE_PLAYLIST)
        assert channels[0].attributes == (
            ("tvg-logo", "http://logo.example.com/tf1.png"),
            ("group-title", "General"),
        )
        assert channels[1].attributes == ()

    def test_trailing_newline_after_directive_drops_entry(self):
        channels = parse_playlist("#EXTM3U\n#EXTINF:-1,Lonely\n")
        assert channels == []

    def test_directive_followed_by_directive_drops_first_entry(self):
        channels = parse_playlist("#EXTM3U\n#EXTINF:-1,A\n#EXTINF:-1,B\nhttp://b.example.com/b\n")

        assert [channel.name for channel in channels] == ["B"]
        assert channels[0].stream_url == "http://b.example.com/b"

    def test_option_lines_before_location_are_passed_over(self):
        content = (
            "#EXTM3U\n"
            "#EXTINF:-1 tvg-id=\"TF1.fr\",TF1\n"
            "#EXTVLCOPT:http-user-agent=Mozilla/5.0\n"
            "#EXTVLCOPT:http-referrer=https://example.com/\n"
            "\n"
            "http://a.example.com/tf1\n"
        )
        channels = parse_playlist(content)

        assert len(channels) == 1
        assert channels[0].stream_url == "http://a.example.com/tf1"

    def test_option_line_then_end_of_input_drops_entry(self):
        assert parse_playlist("#EXTINF:-1,TF1\n#EXTVLCOPT:http-user-agent=Mozilla\n") == []

    def test_crlf_line_endings(self):
        channels = parse_playlist("#EXTM3U\r\n#EXTINF:-1,TF1\r\nhttp://a.example.com/tf1\r\n")
        assert len(channels) == 1
        assert channels[0].name == "TF1"
        assert channels[0].stream_url == "http://a.example.com/tf1"

    def test_name_is_text_after_first_comma(self):
        channels = parse_playlist("#EXTINF:-1,News, Weather\nhttp://a.example.com/n\n")
        assert channels[0].name == "News, Weather"

    def test_indented_directive_is_accepted(self):
        channels = parse_playlist("   #EXTINF:-1,M6\n   http://a.example.com/m6  \n")
        assert channels[0].name == "M6"
        assert channels[0].stream_url == "http://a.example.com/m6"

    def test_empty_content(self):
        assert parse_playlist("") == []
        assert parse_playlist("#EXTM3U\n") == []
