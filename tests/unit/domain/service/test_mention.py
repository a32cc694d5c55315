"""Unit tests for mention extraction and rich-text segments."""

from simskut.domain.service.mention import SegmentKind, extract_mentions, render_segments


class TestExtractMentions:
    """Tests for extract_mentions."""

    def test_unique_in_order(self):
        """Each username appears once, in order of first mention."""
        text = "@bob olha isso @alice#1234 e @bob de novo"

        assert extract_mentions(text) == ["bob", "alice#1234"]

    def test_no_mentions(self):
        """Plain text and empty input have no mentions."""
        assert extract_mentions("sem menções aqui") == []
        assert extract_mentions("") == []


class TestRenderSegments:
    """Tests for render_segments."""

    def test_mixed_text(self):
        """Mentions link to profiles and URLs become spoilers."""
        text = "oi @bob veja https://gallery.example/lot/1, legal"

        segments = render_segments(text)

        assert [s.kind for s in segments] == [
            SegmentKind.TEXT,
            SegmentKind.MENTION,
            SegmentKind.TEXT,
            SegmentKind.SPOILER,
            SegmentKind.TEXT,
        ]
        mention = segments[1]
        assert mention.username == "bob"
        assert mention.href == "/profile/bob"
        spoiler = segments[3]
        # Trailing punctuation stays in the text
        assert spoiler.text == "https://gallery.example/lot/1"
        assert segments[4].text == ", legal"

    def test_segments_cover_text_exactly(self):
        """Concatenating the segments gives back the input."""
        text = "@ana@bia https://a.b/c?d=@e fim"

        segments = render_segments(text)

        assert "".join(s.text for s in segments) == text
        for before, after in zip(segments, segments[1:]):
            assert before.end == after.start

    def test_overlap_first_match_wins(self):
        """A mention inside a URL is part of the URL."""
        segments = render_segments("https://x.y/@bob")

        assert len(segments) == 1
        assert segments[0].kind == SegmentKind.SPOILER

    def test_tagged_mention_href_is_escaped(self):
        """The # of a tagged username is percent-encoded in the link."""
        [segment] = render_segments("@alice#1234")

        assert segment.href == "/profile/alice%231234"

    def test_empty(self):
        """Empty text has no segments."""
        assert render_segments("") == []
