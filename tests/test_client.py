import json
from unittest.mock import MagicMock

import pytest

from app import client


def fake_response(status_code, payload):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = json.dumps(payload)
    return response


def test_read_subtopics_merges_flags_and_file(tmp_path):
    path = tmp_path / "subtopics.txt"
    path.write_text("light reactions\n\n  calvin cycle  \n")

    assert client.read_subtopics([" chlorophyll ", ""], str(path)) == [
        "chlorophyll",
        "light reactions",
        "calvin cycle",
    ]


def test_analyze_posts_camel_case_payload(monkeypatch, capsys):
    post = MagicMock(return_value=fake_response(200, {"success": True}))
    monkeypatch.setattr(client.requests, "post", post)

    client.main(
        [
            "analyze",
            "https://youtu.be/dQw4w9WgXcQ",
            "--topic",
            "Photosynthesis",
            "--subtopic",
            "light reactions",
            "--subtopic",
            "energy conversion",
            "--provider",
            "gemini",
        ]
    )

    url = post.call_args.args[0]
    assert url == "http://localhost:5000/api/analyze"
    assert post.call_args.kwargs["json"] == {
        "youtubeUrl": "https://youtu.be/dQw4w9WgXcQ",
        "topic": "Photosynthesis",
        "customSubtopics": ["light reactions", "energy conversion"],
        "provider": "gemini",
    }
    assert json.loads(capsys.readouterr().out) == {"success": True}


def test_analyze_without_subtopics_exits(monkeypatch):
    monkeypatch.setattr(client.requests, "post", MagicMock())

    with pytest.raises(SystemExit):
        client.main(["analyze", "https://youtu.be/dQw4w9WgXcQ", "--topic", "Biology"])
    client.requests.post.assert_not_called()


def test_health_uses_api_url(monkeypatch, capsys):
    payload = {"status": "OK", "hasGroqKey": True}
    monkeypatch.setattr(
        client.requests, "get", MagicMock(return_value=fake_response(200, payload))
    )

    client.main(["--api-url", "http://api.local", "health"])

    client.requests.get.assert_called_once_with("http://api.local/api/health", timeout=10)
    assert json.loads(capsys.readouterr().out) == payload


def test_analyze_writes_output_file(monkeypatch, tmp_path):
    payload = {"success": True, "analysis": {"overallScore": 70}}
    monkeypatch.setattr(
        client.requests, "post", MagicMock(return_value=fake_response(200, payload))
    )
    output = tmp_path / "report.json"

    client.main(
        ["analyze", "https://youtu.be/dQw4w9WgXcQ", "--topic", "Biology",
         "--subtopic", "cells", "--output", str(output)]
    )

    assert json.loads(output.read_text()) == payload


def test_error_status_exits_non_zero(monkeypatch):
    monkeypatch.setattr(
        client.requests,
        "get",
        MagicMock(return_value=fake_response(500, {"error": "boom"})),
    )

    with pytest.raises(SystemExit) as excinfo:
        client.main(["health"])
    assert excinfo.value.code == 1
