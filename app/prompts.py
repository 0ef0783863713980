"""
Prompt templates and constants for subtopic coverage analysis.
"""

# Constants
MAX_TRANSCRIPT_CHARS = 10000
TRUNCATION_MARKER = "... [truncated]"
COVERAGE_MAX_TOKENS = 2000
COVERED_THRESHOLD = 50
TRANSCRIPT_PREVIEW_CHARS = 500

NO_EVIDENCE = "No evidence provided."
FAILED_EVIDENCE = "Failed to generate coverage analysis."
NO_TRANSCRIPT = "No transcript available."

COVERAGE_SYSTEM_MESSAGE = (
    "You are an educational content analyst. Only output valid JSON."
)

COVERAGE_PROMPT = '''You are an educational content analyst.
For each subtopic, analyze the transcript and return ONLY valid JSON in this format:
[
  {{ "subtopic": "<name>", "coverageScore": <0-100>, "evidence": "<1-2 sentences>" }}
]

Transcript: """{transcript}"""
Subtopics: {subtopics}'''

SUCCESS_SUMMARY = "Overall coverage based on {count} subtopics using {provider}."
FAILURE_SUMMARY = "Failed to generate coverage analysis using {provider}."
