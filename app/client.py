import argparse
import asyncio
import json
import sys

import requests

from app.key_check import build_key_checks, run_key_checks
from app.settings import settings

DEFAULT_API_URL = "http://localhost:5000"


def read_subtopics(subtopics=None, subtopics_file=None):
    """Collect subtopics from flags and an optional one-per-line file"""
    collected = [s.strip() for s in subtopics or [] if s.strip()]

    if subtopics_file:
        with open(subtopics_file, "r", encoding="utf-8") as f:
            collected.extend(line.strip() for line in f if line.strip())

    return collected


def analyze_video(api_url, youtube_url, topic, subtopics, provider="groq"):
    """Request a coverage analysis from the API"""
    payload = {
        "youtubeUrl": youtube_url,
        "topic": topic,
        "customSubtopics": subtopics,
        "provider": provider,
    }

    response = requests.post(f"{api_url}/api/analyze", json=payload, timeout=120)

    if response.status_code != 200:
        print(f"Error: {response.status_code} - {response.text}")
        sys.exit(1)

    return response.json()


def check_health(api_url):
    """Get service status and which credentials are configured"""
    response = requests.get(f"{api_url}/api/health", timeout=10)

    if response.status_code != 200:
        print(f"Error: {response.status_code} - {response.text}")
        sys.exit(1)

    return response.json()


def check_keys(app_settings=settings):
    """Make one live call per credential and report each service"""
    results = asyncio.run(run_key_checks(build_key_checks(app_settings)))

    for name, (ok, detail) in results.items():
        status = "OK" if ok else "FAILED"
        print(f"{name} {status}: {detail}")

    return all(ok for ok, _ in results.values())


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Client for the YouTube Subtopic Coverage Analyzer API"
    )
    parser.add_argument("--api-url", default=DEFAULT_API_URL, help="API URL")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Score a video's coverage of subtopics"
    )
    analyze_parser.add_argument("youtube_url", help="YouTube video URL")
    analyze_parser.add_argument("--topic", required=True, help="Educational topic")
    analyze_parser.add_argument(
        "--subtopic",
        action="append",
        dest="subtopics",
        help="Subtopic to score (repeatable)",
    )
    analyze_parser.add_argument(
        "--subtopics-file", help="File with one subtopic per line"
    )
    analyze_parser.add_argument(
        "--provider",
        choices=["groq", "gemini"],
        default="groq",
        help="LLM provider used for scoring",
    )
    analyze_parser.add_argument("--output", help="Output file (default: stdout)")

    # Health command
    subparsers.add_parser("health", help="Check API status")

    # Key check command
    subparsers.add_parser(
        "check-keys", help="Make a live call with each configured API key"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "check-keys":
        if not check_keys():
            sys.exit(1)
        return

    if args.command == "analyze":
        subtopics = read_subtopics(args.subtopics, args.subtopics_file)
        if not subtopics:
            parser.error("at least one subtopic is required")
        result = analyze_video(
            args.api_url, args.youtube_url, args.topic, subtopics, args.provider
        )
    else:
        result = check_health(args.api_url)

    output = json.dumps(result, indent=2)

    if getattr(args, "output", None):
        with open(args.output, "w") as f:
            f.write(output)
    else:
        print(output)


if __name__ == "__main__":
    main()
