"""Tests for the stream extraction heuristics."""

import pytest
from bs4 import BeautifulSoup

from khmerdubbed.providers.stream_utils import (
    collect_candidates,
    dedupe_urls,
    describe_candidate,
    extract_base64_iframes,
    extract_dom_sources,
    extract_player_config,
    is_denylisted,
    is_direct_media,
    rank_urls,
    resolve_candidate,
)

PAGE = "https://www.khmeravenue.com/videos/lpp-05/"
B64_IFRAME = "PGlmcmFtZSBzcmM9Imh0dHBzOi8vcGxheWVyLmV4YW1wbGUubmV0L2VtYmVkL2FiYyIgYWxsb3dmdWxsc2NyZWVuPjwvaWZyYW1lPg=="
B64_IFRAME_UNPADDED = B64_IFRAME.rstrip("=")
B64_UPPER_IFRAME = "PElGUkFNRSBTUkM9Ii9lL3h5eiI+PC9JRlJBTUU+"
# <iframe src="https://p.example.net/e?id=7&amp;autoplay=1"></iframe>
B64_ENTITY_IFRAME = "PGlmcmFtZSBzcmM9Imh0dHBzOi8vcC5leGFtcGxlLm5ldC9lP2lkPTcmYW1wO2F1dG9wbGF5PTEiPjwvaWZyYW1lPg=="


class TestBase64Iframes:
    """Obfuscated iframe payloads."""

    @pytest.mark.parametrize("call", ["atob", "Base64.decode", "base64_decode", "decode"])
    def test_decode_calls(self, call) -> None:
        text = f'<script>document.write({call}("{B64_IFRAME}"));</script>'
        assert extract_base64_iframes(text) == ["https://player.example.net/embed/abc"]

    def test_unpadded_and_single_quotes(self) -> None:
        text = f"<script>document.write(atob('{B64_IFRAME_UNPADDED}'))</script>"
        assert extract_base64_iframes(text) == ["https://player.example.net/embed/abc"]

    def test_uppercase_markup(self) -> None:
        text = f'atob("{B64_UPPER_IFRAME}")'
        assert extract_base64_iframes(text) == ["/e/xyz"]

    def test_entities_decoded(self) -> None:
        text = f'atob("{B64_ENTITY_IFRAME}")'
        assert extract_base64_iframes(text) == ["https://p.example.net/e?id=7&autoplay=1"]

    def test_non_iframe_payload_ignored(self) -> None:
        # "hello world, not markup"
        text = 'atob("aGVsbG8gd29ybGQsIG5vdCBtYXJrdXA=")'
        assert extract_base64_iframes(text) == []

    def test_garbage_ignored(self) -> None:
        assert extract_base64_iframes('atob("AAAAAAAAAAAAAAAAA")') == []


class TestDomAndRegex:
    """Literal tags and player configuration idioms."""

    def test_dom_sources(self) -> None:
        soup = BeautifulSoup(
            '<iframe src="/embed/1"></iframe><video><source src="a.mp4"></video><iframe></iframe>',
            "html.parser",
        )
        assert extract_dom_sources(soup) == ["/embed/1", "a.mp4"]

    def test_player_config_patterns(self) -> None:
        text = """
        jwplayer("p").setup({ file: "https://cdn.example.com/v/1.m3u8?a=1&amp;b=2" });
        player.load({ playlist: '/feeds/5.json' });
        swfobject.embedSWF("/player.swf?vid=9", "flash");
        <iframe src="https://ok.example.ru/videoembed/77" allow="autoplay; fullscreen"></iframe>
        <source type="video/mp4" src="/media/ep5.mp4">
        """
        assert extract_player_config(text) == [
            "https://cdn.example.com/v/1.m3u8?a=1&b=2",
            "/feeds/5.json",
            "/player.swf?vid=9",
            "https://ok.example.ru/videoembed/77",
            "/media/ep5.mp4",
        ]

    def test_src_without_autoplay_not_matched(self) -> None:
        assert extract_player_config('<img src="/logo.png" alt="x">') == []


class TestResolution:
    """Absolute resolution, denylist, ranking."""

    def test_resolve_relative_and_protocol_relative(self) -> None:
        assert resolve_candidate("/embed/1", PAGE) == "https://www.khmeravenue.com/embed/1"
        assert resolve_candidate("//cdn.example.com/a.mp4", PAGE) == "https://cdn.example.com/a.mp4"
        assert resolve_candidate("next/", PAGE) == "https://www.khmeravenue.com/videos/lpp-05/next/"

    @pytest.mark.parametrize("bad", ["", "javascript:void(0)", "about:blank", "data:text/html,hi"])
    def test_unresolvable_dropped(self, bad) -> None:
        assert resolve_candidate(bad, PAGE) is None

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.facebook.com/plugins/like.php",
            "https://connect.facebook.net/sdk.js",
            "https://www.googletagmanager.com/ns.html?id=1",
            "https://twitter.com/share",
        ],
    )
    def test_denylisted_dropped(self, url) -> None:
        assert is_denylisted(url)
        assert resolve_candidate(url, PAGE) is None

    def test_lookalike_host_not_denylisted(self) -> None:
        assert not is_denylisted("https://notfacebook.com/embed/1")

    @pytest.mark.parametrize(
        "url, direct",
        [
            ("https://cdn.example.com/a.mp4", True),
            ("https://cdn.example.com/a.MP4?token=1", True),
            ("https://cdn.example.com/master.m3u8", True),
            ("https://cdn.example.com/hls?src=index.m3u8", True),
            ("https://cdn.example.com/manifest.mpd", True),
            ("https://player.example.net/embed/abc", False),
            ("https://cdn.example.com/mp4/page", False),
        ],
    )
    def test_is_direct_media(self, url, direct) -> None:
        assert is_direct_media(url) is direct

    def test_dedupe_keeps_first(self) -> None:
        assert dedupe_urls(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]

    def test_rank_is_stable(self) -> None:
        urls = ["https://e/1", "https://d/1.mp4", "https://e/2", "https://d/2.m3u8"]
        assert rank_urls(urls) == ["https://d/1.mp4", "https://d/2.m3u8", "https://e/1", "https://e/2"]

    def test_collect_candidates(self) -> None:
        html = (
            '<iframe src="/embed/1" allow="autoplay"></iframe>'
            '<iframe src="https://www.facebook.com/plugins/video.php"></iframe>'
            '<iframe src="javascript:false"></iframe>'
        )
        assert collect_candidates(html, PAGE) == ["https://www.khmeravenue.com/embed/1"]

    def test_obfuscated_and_plain_copies_merge(self) -> None:
        html = (
            f'<script>document.write(atob("{B64_ENTITY_IFRAME}"));</script>'
            '<iframe src="https://p.example.net/e?id=7&amp;autoplay=1"></iframe>'
        )
        assert collect_candidates(html, PAGE) == ["https://p.example.net/e?id=7&autoplay=1"]

    def test_describe_candidate(self) -> None:
        assert describe_candidate("https://www.cdn.example.com/x.m3u8") == "HLS - cdn.example.com"
        assert describe_candidate("https://cdn.example.com/x.mp4") == "Direct - cdn.example.com"
        assert describe_candidate("https://player.example.net/e/1") == "Embed - player.example.net"
