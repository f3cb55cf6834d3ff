import json

import pytest

from domain.services.response_normalizer import (
    normalize_cvs,
    normalize_rankings,
    strip_control_chars,
)

RECORD = {
    "filename": "cv1.txt",
    "candidateName": "Jane Doe",
    "phone": "555-0100",
    "email": "jane@x.com",
    "score": 85,
    "explanation": "Strong Java background",
    "advantages": ["5 years Java"],
    "disadvantages": ["No cloud experience"],
}


def test_strip_control_chars():
    assert strip_control_chars("a\x00b\x1fc\x7fd\ne\tf") == "abcdef"
    assert strip_control_chars(None) == ""


def test_valid_rankings_returned_verbatim():
    data = normalize_rankings(json.dumps({"rankings": [RECORD]}))
    assert data == {"rankings": [RECORD]}
    assert set(data["rankings"][0]) == set(RECORD)


def test_control_bytes_before_valid_json_are_stripped():
    raw = "\x00\x01\x02" + json.dumps({"rankings": [RECORD]}, indent=2)
    assert normalize_rankings(raw)["rankings"][0]["candidateName"] == "Jane Doe"


def test_raw_newlines_inside_strings_are_tolerated():
    raw = '{"cvs": [{"title": "CV 1", "content": "# Jane\n## Skills"}]}'
    assert normalize_cvs(raw)["cvs"][0]["content"] == "# Jane## Skills"


def test_markdown_code_fence_is_unwrapped():
    raw = "```json\n" + json.dumps({"rankings": [RECORD]}) + "\n```"
    assert normalize_rankings(raw)["rankings"] == [RECORD]


@pytest.mark.parametrize("raw", [
    '{"rankings": [{"filename": "cv1.txt", "score": 8',
    "Sorry, I cannot help with that.",
    "",
    '{"result": []}',
    '[{"filename": "cv1.txt"}]',
])
def test_unusable_rankings_fall_back(raw):
    data = normalize_rankings(raw)
    assert len(data["rankings"]) == 1
    fallback = data["rankings"][0]
    assert fallback["score"] == 0
    assert fallback["advantages"] == []
    assert fallback["disadvantages"] == []
    assert "error parsing" in fallback["explanation"]
    assert fallback["candidateName"] == "Not provided"


def test_unusable_generation_falls_back_to_raw_text():
    data = normalize_cvs("Here is your CV:\x07 Jane Doe")
    assert data == {"cvs": [{"title": "Generated CV", "content": "Here is your CV: Jane Doe"}]}
