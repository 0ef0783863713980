"""
Utility functions for URL parsing, transcript shaping and LLM output parsing.
"""

import json
import math
import re
from typing import Any, Optional

from app.logger import get_logger
from app.prompts import (
    MAX_TRANSCRIPT_CHARS,
    TRANSCRIPT_PREVIEW_CHARS,
    TRUNCATION_MARKER,
)

logger = get_logger("utils")

VIDEO_ID_LENGTH = 11
VIDEO_ID_CHARS = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Each pattern captures everything up to the next delimiter; length is checked after.
VIDEO_URL_PATTERNS = [
    r"youtu\.be/([^#&?/]*)",
    r"/embed/([^#&?/]*)",
    r"/v/([^#&?/]*)",
    r"/u/\w/([^#&?/]*)",
    r"watch\?(?:[^#]*&)?v=([^#&?/]*)",
]

CODE_FENCE_JSON = re.compile(r"```json", re.IGNORECASE)
JSON_SPAN = re.compile(r"\{[\s\S]*\}|\[[\s\S]*\]")
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def extract_video_id(url: str) -> Optional[str]:
    """Extract the 11-character video ID from a YouTube URL, or None."""
    if not url:
        return None

    for pattern in VIDEO_URL_PATTERNS:
        if match := re.search(pattern, url):
            candidate = match.group(1)
            if len(candidate) == VIDEO_ID_LENGTH and VIDEO_ID_CHARS.match(candidate):
                return candidate

    return None


def truncate_transcript(
    transcript_text: str, max_chars: int = MAX_TRANSCRIPT_CHARS
) -> str:
    """Cut the transcript at a fixed character count and mark the cut."""
    if len(transcript_text) <= max_chars:
        return transcript_text

    logger.info(
        f"Truncated transcript from {len(transcript_text)} to {max_chars} characters"
    )
    return transcript_text[:max_chars] + TRUNCATION_MARKER


def preview_transcript(
    transcript_text: str, max_chars: int = TRANSCRIPT_PREVIEW_CHARS
) -> str:
    if len(transcript_text) > max_chars:
        return transcript_text[:max_chars] + "..."
    return transcript_text


def extract_json(response_text: Optional[str]) -> Any:
    """
    Best-effort parse of a JSON payload out of an LLM reply.

    Markdown code fences are removed first. If the cleaned text does not parse
    as a whole, the greedy span from the first ``{``/``[`` to the last
    ``}``/``]`` is tried instead.

    Args:
        response_text: Raw model output

    Returns:
        The parsed value, or an empty list when nothing parses
    """
    if not response_text:
        return []

    cleaned = CODE_FENCE_JSON.sub("", response_text).replace("```", "").strip()
    if not cleaned:
        return []

    try:
        return json.loads(cleaned)
    except (json.JSONDecodeError, RecursionError):
        pass

    match = JSON_SPAN.search(cleaned)
    if not match:
        logger.warning("No JSON found in LLM response")
        return []

    try:
        return json.loads(match.group(0))
    except (json.JSONDecodeError, RecursionError):
        logger.warning("Could not parse JSON span from LLM response")
        return []


def parse_score(value: Any) -> int:
    """Read a leading integer the way a lenient parser would; 0 if there is none."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0

    if match := LEADING_INT.match(str(value)):
        return int(match.group(1))
    return 0


def clamp_score(value: int, low: int = 0, high: int = 100) -> int:
    return min(max(value, low), high)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
