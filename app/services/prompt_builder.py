"""
Prompt builder for constructing the coverage evaluation exchange.
"""

import json
from typing import Dict, List, NamedTuple, Optional

from app.logger import get_logger
from app.prompts import COVERAGE_PROMPT, COVERAGE_SYSTEM_MESSAGE
from app.services.utils import truncate_transcript

logger = get_logger("prompt_builder")


class Prompt(NamedTuple):
    """Container for system message and prompt."""

    system_message: str
    user_message: str

    def to_messages(self) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_message},
            {"role": "user", "content": self.user_message},
        ]


class PromptBuilder:
    """Builder class for the coverage prompt."""

    def __init__(self):
        self._transcript: Optional[str] = None
        self._subtopics: Optional[List[str]] = None
        self._system_message = COVERAGE_SYSTEM_MESSAGE

    def with_transcript(self, transcript: str) -> "PromptBuilder":
        """Set the transcript text, truncated to the prompt limit."""
        self._transcript = truncate_transcript(transcript)
        return self

    def with_subtopics(self, subtopics: List[str]) -> "PromptBuilder":
        """Set the subtopics to score."""
        self._subtopics = list(subtopics)
        return self

    def with_system_message(self, system_message: str) -> "PromptBuilder":
        self._system_message = system_message
        return self

    def _build_prompt(self) -> str:
        if self._transcript is None:
            raise ValueError("Transcript is required to build prompt")
        if not self._subtopics:
            raise ValueError("At least one subtopic is required to build prompt")

        return COVERAGE_PROMPT.format(
            transcript=self._transcript,
            subtopics=json.dumps(
                self._subtopics, ensure_ascii=False, separators=(",", ":")
            ),
        )

    def build(self) -> Prompt:
        """Build and return the complete prompt (system_message, prompt)."""
        return Prompt(
            system_message=self._system_message,
            user_message=self._build_prompt(),
        )
