"""
Subtopic coverage analysis: prompt the provider, parse its JSON, score the result.
"""

from typing import Any, Callable, List

from app.exceptions import ProviderError
from app.llm_clients import BaseLLMClient
from app.logger import get_logger
from app.models import CoverageItem, CoverageReport
from app.prompts import (
    COVERAGE_MAX_TOKENS,
    COVERED_THRESHOLD,
    FAILED_EVIDENCE,
    FAILURE_SUMMARY,
    NO_EVIDENCE,
    SUCCESS_SUMMARY,
)
from app.services.prompt_builder import PromptBuilder
from app.services.utils import clamp_score, extract_json, parse_score, round_half_up

logger = get_logger("coverage_analyzer")


def normalize_items(parsed: Any) -> List[CoverageItem]:
    """
    Turn whatever the model returned into CoverageItems.

    Only a JSON array counts; any other shape yields no items. Items are
    taken as given: their number and names are not matched against the
    requested subtopics.
    """
    if not isinstance(parsed, list):
        logger.warning(f"Expected a JSON array, got {type(parsed).__name__}")
        return []

    items = []
    for entry in parsed:
        if not isinstance(entry, dict):
            logger.debug(f"Skipping non-object coverage entry: {entry!r}")
            continue

        score = clamp_score(parse_score(entry.get("coverageScore")))
        subtopic = entry.get("subtopic")
        items.append(
            CoverageItem(
                subtopic="" if subtopic is None else str(subtopic),
                coverage_score=score,
                covered=score >= COVERED_THRESHOLD,
                evidence=str(entry.get("evidence") or NO_EVIDENCE),
            )
        )
    return items


def failed_report(subtopics: List[str], provider: str) -> CoverageReport:
    return CoverageReport(
        overall_score=0,
        subtopic_analysis=[
            CoverageItem(
                subtopic=subtopic,
                coverage_score=0,
                covered=False,
                evidence=FAILED_EVIDENCE,
            )
            for subtopic in subtopics
        ],
        summary=FAILURE_SUMMARY.format(provider=provider),
    )


class CoverageAnalyzer:
    def __init__(self, client_factory: Callable[[str], BaseLLMClient]):
        self.client_factory = client_factory

    async def analyze(
        self, transcript: str, subtopics: List[str], provider: str
    ) -> CoverageReport:
        """
        Score how well the transcript covers each subtopic.

        Never raises: any failure yields a zero-score report with one
        item per requested subtopic.

        Args:
            transcript: Transcript (or description) text
            subtopics: Requested subtopics, in order
            provider: Provider name, e.g. "groq" or "gemini"

        Returns:
            CoverageReport
        """
        try:
            return await self._analyze(transcript, subtopics, provider)
        except Exception as e:
            logger.error(f"Coverage analysis error: {str(e)}", exc_info=True)
            return failed_report(subtopics, provider)

    async def _analyze(
        self, transcript: str, subtopics: List[str], provider: str
    ) -> CoverageReport:
        llm_client = self.client_factory(provider)
        prompt = (
            PromptBuilder()
            .with_transcript(transcript)
            .with_subtopics(subtopics)
            .build()
        )

        response_text = await llm_client.complete(
            prompt.to_messages(), max_tokens=COVERAGE_MAX_TOKENS
        )
        logger.debug(f"Raw coverage response: {response_text[:500]}")

        items = normalize_items(extract_json(response_text))
        if not items:
            raise ProviderError("No coverage items could be parsed from the response")

        overall_score = round_half_up(
            sum(item.coverage_score for item in items) / len(items)
        )
        logger.info(
            f"Coverage analysis via {provider}: {len(items)} items, overall {overall_score}"
        )

        return CoverageReport(
            overall_score=overall_score,
            subtopic_analysis=items,
            summary=SUCCESS_SUMMARY.format(count=len(subtopics), provider=provider),
        )
