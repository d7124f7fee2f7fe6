"""Tests for JsonExtractor."""
import json

from issue_delta.core.services import JsonExtractor


def test_extract_json_from_text():
    extractor = JsonExtractor()
    text = 'Here is the result: {"summary": "ok", "issues": []}'

    result = extractor.extract(text)

    assert json.loads(result) == {"summary": "ok", "issues": []}


def test_extract_json_from_markdown_fence():
    extractor = JsonExtractor()
    text = '```json\n{"issues": [{"issueCode": "MAGIC_NUMBER"}]}\n```'

    result = extractor.extract(text)

    assert json.loads(result)["issues"][0]["issueCode"] == "MAGIC_NUMBER"


def test_extract_bare_array():
    extractor = JsonExtractor()
    text = 'Issues:\n[{"issueCode": "NESTED_LOOP"}]\nDone.'

    assert json.loads(extractor.extract(text)) == [{"issueCode": "NESTED_LOOP"}]


def test_extract_returns_original_when_no_json():
    extractor = JsonExtractor()
    text = "no structured output here"

    assert extractor.extract(text) == text


def test_extract_returns_original_when_invalid():
    extractor = JsonExtractor()
    text = "{not: valid json}"

    assert extractor.extract(text) == text


def test_extract_falls_back_to_other_opener():
    extractor = JsonExtractor()
    text = 'Note [1]: scan finished.\n{"issues": [{"issueCode": "MAGIC_NUMBER"}]}'

    assert json.loads(extractor.extract(text)) == {"issues": [{"issueCode": "MAGIC_NUMBER"}]}
