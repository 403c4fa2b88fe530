"""Tests for the $ / $$ delimiter scanner."""

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from gladest_segments.scanner import (
    MathKind,
    MathRegion,
    find_inline,
    is_escaped,
    probe_block,
    probe_inline,
    scan_block,
    scan_inline,
)

plain_text = st.text(alphabet=st.characters(blacklist_characters="$\\\n\r"), max_size=30)


class TestBlockFastPath:
    def test_single_line(self) -> None:
        region = scan_block("$$ x + y $$")
        assert region.kind is MathKind.BLOCK
        assert region.content == "x + y"
        assert region.span == (0, 11)

    def test_consumes_only_that_line(self) -> None:
        src = "$$ x $$\nnext line"
        region = scan_block(src)
        assert src[:region.end] == "$$ x $$"

    def test_leading_whitespace_allowed(self) -> None:
        region = scan_block("   $$a$$")
        assert region.content == "a"
        assert region.start == 0

    def test_text_after_closing_marker_is_consumed(self) -> None:
        src = "$$a$$ trailing\nnext"
        region = scan_block(src)
        assert region.content == "a"
        assert src[region.end:] == "\nnext"

    def test_empty_single_line_rejected(self) -> None:
        assert scan_block("$$$$") is None
        assert scan_block("$$   $$") is None

    def test_must_start_a_line(self) -> None:
        assert scan_block("text $$a$$", 5) is None
        assert scan_block("text\n$$a$$", 5).content == "a"

    def test_not_a_marker(self) -> None:
        assert scan_block("$a$") is None
        assert scan_block("\\$$a$$") is None
        assert scan_block("") is None


class TestBlockSlowPath:
    def test_terminating_line(self) -> None:
        src = "$$\na\n  b\n$$\nrest"
        region = scan_block(src)
        assert region.content == "a\n  b"
        assert src[region.end:] == "\nrest"

    def test_internal_spacing_kept(self) -> None:
        region = scan_block("$$\n  a  \n\tb\n$$")
        assert region.content == "a  \n\tb"

    def test_terminator_with_surrounding_spaces(self) -> None:
        region = scan_block("$$\na\n   $$   ")
        assert region.content == "a"

    def test_line_ending_with_marker(self) -> None:
        src = "$$\na\nb $$\nrest"
        region = scan_block(src)
        assert region.content == "a\nb"
        assert src[region.end:] == "\nrest"

    def test_opening_line_remainder_included(self) -> None:
        assert scan_block("$$ a\nb\n$$").content == "a\nb"

    def test_blank_lines_inside(self) -> None:
        assert scan_block("$$\na\n\nb\n$$").content == "a\n\nb"

    def test_unterminated_fails(self) -> None:
        assert scan_block("$$\na\nb") is None
        assert scan_block("$$\n") is None

    def test_limit_bounds_the_search(self) -> None:
        src = "$$\na\n$$"
        assert scan_block(src, 0, limit=4) is None
        assert scan_block(src, 0, limit=len(src)).content == "a"

    def test_empty_multiline_rejected(self) -> None:
        assert scan_block("$$\n   \n$$") is None

    def test_probe_matches_scan(self) -> None:
        assert probe_block("$$\nx\n$$")
        assert not probe_block("$$\nx")


class TestInline:
    def test_simple(self) -> None:
        region = scan_inline("$a+b$")
        assert region.kind is MathKind.INLINE
        assert region.content == "a+b"
        assert region.span == (0, 5)

    def test_trimmed(self) -> None:
        assert scan_inline("$  x  $").content == "x"

    def test_blank_rejected(self) -> None:
        assert scan_inline("$ $") is None
        assert scan_inline("$$") is None

    def test_escaped_opening(self) -> None:
        assert scan_inline("\\$x$", 1) is None
        assert find_inline("\\$x$") is None

    def test_escaped_backslash_does_not_escape(self) -> None:
        assert scan_inline("\\\\$x$", 2).content == "x"

    def test_escaped_dollar_inside(self) -> None:
        assert scan_inline("$a\\$b$").content == "a\\$b"

    def test_double_dollar_skipped_inside(self) -> None:
        assert scan_inline("$a$$b$").content == "a$$b"

    def test_line_break_aborts(self) -> None:
        assert scan_inline("$a\nb$") is None
        assert scan_inline("$a\\\nb$") is None

    def test_block_marker_never_opens(self) -> None:
        assert scan_inline("$$x$", 0) is None
        assert scan_inline("$$x$", 1) is None
        assert find_inline("$$x$") is None

    def test_second_half_of_escaped_pair_opens(self) -> None:
        assert find_inline("\\$$x$").content == "x"

    def test_cursor_after_closing_marker(self) -> None:
        src = "text $a+b$ more"
        region = find_inline(src)
        assert region.content == "a+b"
        assert src[:region.start] == "text "
        assert src[region.end:] == " more"

    def test_unclosed(self) -> None:
        assert scan_inline("$5 only") is None
        assert not probe_inline("$5 only")

    def test_find_skips_failed_candidates(self) -> None:
        region = find_inline("$ $x$")
        assert region.content == "x"
        assert region.start == 2

    def test_position_must_hold_a_dollar(self) -> None:
        assert scan_inline("a$b$", 0) is None


class TestHelpers:
    @pytest.mark.parametrize(
        ("src", "pos", "expected"),
        [
            ("$", 0, False),
            ("\\$", 1, True),
            ("\\\\$", 2, False),
            ("\\\\\\$", 3, True),
        ],
    )
    def test_is_escaped(self, src: str, pos: int, expected: bool) -> None:
        assert is_escaped(src, pos) is expected

    def test_region_rejects_empty_content(self) -> None:
        with pytest.raises(ValueError):
            MathRegion(MathKind.INLINE, "  ", (0, 3))


class TestScannerProperties:
    @given(body=plain_text)
    def test_inline_content_is_trimmed_body(self, body: str) -> None:
        assume(body.strip())
        region = scan_inline("$" + body + "$")
        assert region is not None
        assert region.content == body.strip()
        assert region.end == len(body) + 2

    @given(body=plain_text)
    def test_single_line_block_content(self, body: str) -> None:
        assume(body.strip())
        line = "$$" + body + "$$"
        region = scan_block(line + "\nafter")
        assert region is not None
        assert region.content == body.strip()
        assert region.end == len(line)

    @given(lines=st.lists(plain_text, min_size=1, max_size=6))
    def test_multiline_block_content(self, lines: list) -> None:
        body = "\n".join(lines)
        assume(body.strip())
        region = scan_block("$$\n" + body + "\n$$")
        assert region is not None
        assert region.content == body.strip()

    @given(lines=st.lists(plain_text, max_size=6))
    def test_unterminated_block_never_matches(self, lines: list) -> None:
        assert scan_block("$$\n" + "\n".join(lines)) is None

    @given(body=plain_text)
    def test_escaped_dollar_never_opens(self, body: str) -> None:
        assert scan_inline("\\$" + body + "$", 1) is None
