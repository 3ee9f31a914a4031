"""Unit tests for script chunking and SRT rendering."""

import pytest

from vdash.services.subtitles import (
    SubtitleBlock,
    SubtitleChunker,
    chunk_script,
    format_timestamp,
    render_srt,
    split_script,
)


class TestSplitScript:
    def test_short_script_single_chunk(self) -> None:
        assert split_script("Hello world. Bye.", 500) == ["Hello world. Bye."]

    def test_prefers_last_period_in_window(self) -> None:
        script = "a" * 480 + "." + "b" * 119
        assert len(script) == 600
        chunks = split_script(script, 500)
        assert chunks[0] == "a" * 480 + "."
        assert len(chunks[0]) == 481
        assert chunks[1] == "b" * 119

    def test_hard_cut_without_period(self) -> None:
        chunks = split_script("x" * 1200, 500)
        assert [len(c) for c in chunks] == [500, 500, 200]

    def test_period_at_window_start_is_ignored(self) -> None:
        script = "." + "x" * 20
        assert split_script(script, 10) == [".xxxxxxxxx", "xxxxxxxxxx", "x"]

    def test_chunks_are_trimmed(self) -> None:
        chunks = split_script("One two.   Three four five six.", 12)
        assert chunks[0] == "One two."
        assert all(c == c.strip() for c in chunks)

    def test_blank_script(self) -> None:
        assert split_script("") == []
        assert split_script("  \n\t ") == []

    def test_invalid_length(self) -> None:
        with pytest.raises(ValueError):
            split_script("abc", 0)


class TestChunkScript:
    def test_fixed_windows(self) -> None:
        blocks = chunk_script("x" * 1200, 500, 30)
        assert [(b.index, b.start, b.end) for b in blocks] == [
            (1, 0, 30), (2, 30, 60), (3, 60, 90),
        ]

    def test_timing_independent_of_length(self) -> None:
        blocks = chunk_script("x" * 1001, 500, 30)
        assert len(blocks[2].text) == 1
        assert (blocks[2].start, blocks[2].end) == (60, 90)
        assert blocks[2].duration == 30

    def test_custom_duration(self) -> None:
        blocks = chunk_script("a" * 10, 5, 4)
        assert [(b.start, b.end) for b in blocks] == [(0, 4), (4, 8)]

    def test_empty(self) -> None:
        assert chunk_script("   ") == []


class TestSrt:
    def test_format_timestamp(self) -> None:
        assert format_timestamp(0) == "00:00:00,000"
        assert format_timestamp(90) == "00:01:30,000"
        assert format_timestamp(3661) == "01:01:01,000"

    def test_render(self) -> None:
        blocks = [
            SubtitleBlock(index=1, start=0, end=30, text="First."),
            SubtitleBlock(index=2, start=30, end=60, text="Second."),
        ]
        assert render_srt(blocks) == (
            "1\n00:00:00,000 --> 00:00:30,000\nFirst.\n\n"
            "2\n00:00:30,000 --> 00:01:00,000\nSecond.\n\n"
        )

    def test_chunker_generate(self) -> None:
        chunker = SubtitleChunker(max_chunk_length=10, block_duration_seconds=5)
        srt = chunker.generate_srt("Hi there. General Kenobi.")
        assert srt.startswith("1\n00:00:00,000 --> 00:00:05,000\nHi there.\n\n")
        assert "2\n00:00:05,000 --> 00:00:10,000\n" in srt

    def test_chunker_declines_empty_script(self) -> None:
        assert SubtitleChunker().generate_srt("\n  ") is None
