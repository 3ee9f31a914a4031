"""Script-to-subtitle chunking and SRT rendering.

Splits a free-form script into caption blocks of bounded length, preferring
to end each block on a sentence boundary, and assigns every block a fixed
time window. Output is rendered in standard SRT format::

    <index>
    HH:MM:SS,000 --> HH:MM:SS,000
    <text>
    <blank line>
"""

import logging

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHUNK_LENGTH = 500
DEFAULT_BLOCK_SECONDS = 30


class SubtitleBlock(BaseModel):
    """A caption block with its display window in whole seconds."""

    index: int = Field(..., ge=1, description="1-based block number")
    start: int = Field(..., ge=0, description="Start time in seconds")
    end: int = Field(..., ge=0, description="End time in seconds (exclusive)")
    text: str

    @property
    def duration(self) -> int:
        return self.end - self.start


def split_script(script: str, max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> list[str]:
    """Split script text into chunks of at most ``max_chunk_length`` chars.

    When the remaining text is longer than the limit, the cut is made right
    after the last period inside the window (if that period is not the first
    character); otherwise the window is cut at the limit.
    """
    if max_chunk_length < 1:
        raise ValueError("max_chunk_length must be positive")

    remaining = script.strip()
    chunks: list[str] = []
    while remaining:
        if len(remaining) <= max_chunk_length:
            chunks.append(remaining)
            break

        window = remaining[:max_chunk_length]
        last_period = window.rfind(".")
        if last_period > 0:
            window = window[: last_period + 1]

        chunks.append(window.strip())
        remaining = remaining[len(window):].strip()
    return chunks


def chunk_script(
    script: str,
    max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH,
    block_duration_seconds: int = DEFAULT_BLOCK_SECONDS,
) -> list[SubtitleBlock]:
    """Chunk a script into timed subtitle blocks.

    Block ``n`` spans ``[(n - 1) * d, n * d)`` with ``d`` the block duration,
    regardless of how much text it carries.

    Args:
        script: Raw script text
        max_chunk_length: Maximum characters per block
        block_duration_seconds: Display time of each block

    Returns:
        Ordered blocks; empty when the script is blank
    """
    return [
        SubtitleBlock(
            index=i,
            start=(i - 1) * block_duration_seconds,
            end=i * block_duration_seconds,
            text=text,
        )
        for i, text in enumerate(split_script(script, max_chunk_length), 1)
    ]


def format_timestamp(seconds: int) -> str:
    """Format whole seconds as an SRT timestamp (``HH:MM:SS,000``)."""
    ms = seconds * 1000
    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    secs = ms // 1000
    millis = ms % 1000
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def render_srt(blocks: list[SubtitleBlock]) -> str:
    """Render blocks as SRT text, each block followed by a blank line."""
    return "".join(
        f"{block.index}\n"
        f"{format_timestamp(block.start)} --> {format_timestamp(block.end)}\n"
        f"{block.text}\n\n"
        for block in blocks
    )


class SubtitleChunker:
    """Turns scripts into SRT documents with fixed chunking parameters."""

    def __init__(
        self,
        max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH,
        block_duration_seconds: int = DEFAULT_BLOCK_SECONDS,
    ) -> None:
        self.max_chunk_length = max_chunk_length
        self.block_duration_seconds = block_duration_seconds

    def chunk(self, script: str) -> list[SubtitleBlock]:
        return chunk_script(script, self.max_chunk_length, self.block_duration_seconds)

    def generate_srt(self, script: str) -> str | None:
        """Build the SRT document for a script.

        Returns:
            SRT text, or None when the script is blank and nothing
            should be written
        """
        blocks = self.chunk(script)
        if not blocks:
            logger.info("Script is empty, no subtitles generated")
            return None
        logger.info("Generated %d subtitle blocks", len(blocks))
        return render_srt(blocks)
