import asyncio
import json

import pytest

from app.exceptions import ConfigurationError, ProviderError
from app.prompts import (
    COVERAGE_MAX_TOKENS,
    COVERAGE_SYSTEM_MESSAGE,
    FAILED_EVIDENCE,
    NO_EVIDENCE,
    TRUNCATION_MARKER,
)
from app.services.coverage_analyzer import CoverageAnalyzer, normalize_items
from tests.conftest import FakeLLMClient

TRANSCRIPT = "Photosynthesis converts light to energy."
SUBTOPICS = ["light reactions", "energy conversion"]
WELL_FORMED = json.dumps(
    [
        {"subtopic": "light reactions", "coverageScore": 80, "evidence": "..."},
        {"subtopic": "energy conversion", "coverageScore": 60, "evidence": "..."},
    ]
)


def run_analysis(llm_client, transcript=TRANSCRIPT, subtopics=SUBTOPICS, provider="groq"):
    analyzer = CoverageAnalyzer(lambda name: llm_client)
    return asyncio.run(analyzer.analyze(transcript, subtopics, provider))


def assert_failed_report(report, subtopics, provider):
    assert report.overall_score == 0
    assert [item.subtopic for item in report.subtopic_analysis] == subtopics
    for item in report.subtopic_analysis:
        assert item.coverage_score == 0
        assert item.covered is False
        assert item.evidence == FAILED_EVIDENCE
    assert report.summary == f"Failed to generate coverage analysis using {provider}."


def test_well_formed_response_scores_each_subtopic():
    report = run_analysis(FakeLLMClient(WELL_FORMED))

    assert report.overall_score == 70
    assert [item.subtopic for item in report.subtopic_analysis] == SUBTOPICS
    assert [item.coverage_score for item in report.subtopic_analysis] == [80, 60]
    assert all(item.covered for item in report.subtopic_analysis)
    assert report.summary == "Overall coverage based on 2 subtopics using groq."


def test_fenced_response_matches_unwrapped_response():
    plain = run_analysis(FakeLLMClient(WELL_FORMED))
    fenced = run_analysis(FakeLLMClient(f"```json\n{WELL_FORMED}\n```"))

    assert fenced == plain


def test_prompt_carries_transcript_subtopics_and_token_budget():
    llm = FakeLLMClient(WELL_FORMED)
    run_analysis(llm)

    messages, max_tokens = llm.calls[0]
    assert max_tokens == COVERAGE_MAX_TOKENS
    assert messages[0] == {"role": "system", "content": COVERAGE_SYSTEM_MESSAGE}
    assert messages[1]["role"] == "user"
    assert f'Transcript: """{TRANSCRIPT}"""' in messages[1]["content"]
    assert 'Subtopics: ["light reactions","energy conversion"]' in messages[1]["content"]


def test_long_transcript_is_truncated_in_prompt():
    llm = FakeLLMClient(WELL_FORMED)
    run_analysis(llm, transcript="x" * 12000)

    user_message = llm.calls[0][0][1]["content"]
    assert "x" * 10000 + TRUNCATION_MARKER in user_message
    assert "x" * 10001 not in user_message


def test_llm_failure_degrades_to_zero_report():
    report = run_analysis(FakeLLMClient(error=ProviderError("boom")))

    assert_failed_report(report, SUBTOPICS, "groq")


def test_unknown_provider_degrades_to_zero_report():
    def factory(name):
        raise ConfigurationError(f"Unknown provider: {name}")

    analyzer = CoverageAnalyzer(factory)
    report = asyncio.run(analyzer.analyze(TRANSCRIPT, SUBTOPICS, "openai"))

    assert_failed_report(report, SUBTOPICS, "openai")


@pytest.mark.parametrize("response", ["", "I cannot help with that.", "[]", "```json\n```"])
def test_unparseable_or_empty_response_degrades_to_zero_report(response):
    report = run_analysis(FakeLLMClient(response), provider="gemini")

    assert_failed_report(report, SUBTOPICS, "gemini")


def test_mismatched_items_pass_through_unreconciled():
    response = json.dumps(
        [{"subtopic": "light reaction", "coverageScore": 90, "evidence": "close"}]
    )
    report = run_analysis(FakeLLMClient(response))

    assert len(report.subtopic_analysis) == 1
    assert report.subtopic_analysis[0].subtopic == "light reaction"
    assert report.overall_score == 90
    assert report.summary == "Overall coverage based on 2 subtopics using groq."


def test_scores_are_coerced_and_clamped():
    response = json.dumps(
        [
            {"subtopic": "a", "coverageScore": "120"},
            {"subtopic": "b", "coverageScore": -15, "evidence": ""},
            {"subtopic": "c", "coverageScore": "about half"},
            {"subtopic": "d", "coverageScore": 49.9, "evidence": "partial"},
        ]
    )
    report = run_analysis(FakeLLMClient(response), subtopics=["a", "b", "c", "d"])

    scores = [item.coverage_score for item in report.subtopic_analysis]
    assert scores == [100, 0, 0, 49]
    assert [item.covered for item in report.subtopic_analysis] == [True, False, False, False]
    assert report.subtopic_analysis[0].evidence == NO_EVIDENCE
    assert report.subtopic_analysis[1].evidence == NO_EVIDENCE
    assert report.subtopic_analysis[3].evidence == "partial"
    assert report.overall_score == 37


def test_overall_score_rounds_half_up():
    response = json.dumps(
        [{"subtopic": "a", "coverageScore": 50}, {"subtopic": "b", "coverageScore": 75}]
    )
    report = run_analysis(FakeLLMClient(response), subtopics=["a", "b"])

    assert report.overall_score == 63


def test_repeated_analysis_is_identical():
    llm = FakeLLMClient(WELL_FORMED)
    assert run_analysis(llm) == run_analysis(llm)


@pytest.mark.parametrize(
    "response",
    [
        json.dumps({"analysis": json.loads(WELL_FORMED)}),
        json.dumps({"subtopic": "light reactions", "coverageScore": 80}),
        "```json\n{\"results\": []}\n```",
    ],
)
def test_object_response_degrades_to_zero_report(response):
    report = run_analysis(FakeLLMClient(response))

    assert_failed_report(report, SUBTOPICS, "groq")


def test_normalize_items_skips_non_objects():
    items = normalize_items(["junk", 3, {"coverageScore": 10}])
    assert len(items) == 1
    assert items[0].subtopic == ""


def test_normalize_items_requires_an_array():
    assert normalize_items("text") == []
    assert normalize_items(None) == []
    assert normalize_items({"subtopic": "solo", "coverageScore": 55}) == []
