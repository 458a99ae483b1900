import json

import pytest

from echowrite.services.prompt_builder import Action
from echowrite.services.response_normalizer import FALLBACK_MERMAID, normalize_response, strip_code_fence

VARIATIONS = {"variations": [{"id": "v1", "label": "Formal", "suggestedText": "Hi.", "tone": "formal", "changes": []}]}


def test_strip_code_fence_variants():
    body = json.dumps(VARIATIONS)
    assert strip_code_fence(f"```json\n{body}\n```") == body
    assert strip_code_fence(f"```\n{body}\n```") == body
    assert strip_code_fence(f"  {body}  ") == body


def test_structured_json_is_parsed():
    assert normalize_response(Action.variations, json.dumps(VARIATIONS)) == VARIATIONS
    fenced = "```json\n" + json.dumps({"title": "T", "mermaidCode": "graph TD", "description": "d"}) + "\n```"
    assert normalize_response(Action.generate_visual, fenced)["title"] == "T"


def test_malformed_variations_fall_back_to_single_item():
    raw = "Sure! Here is a nicer version of your text."
    result = normalize_response(Action.variations, raw)
    assert len(result["variations"]) == 1
    item = result["variations"][0]
    assert item["suggestedText"] == raw
    assert item["id"] == "v1"
    assert item["changes"] == [{"field": "overall", "reason": "AI-enhanced content"}]


def test_malformed_length_variations_truncate_buckets():
    raw = "x" * 500
    result = normalize_response(Action.length_variations, raw)
    assert result["simple"][0]["text"] == "x" * 100
    assert result["medium"][0]["text"] == "x" * 300
    assert result["long"][0]["text"] == raw


def test_malformed_visual_uses_placeholder_diagram():
    result = normalize_response(Action.generate_visual, "not json")
    assert result == {
        "title": "Generated Visual",
        "mermaidCode": FALLBACK_MERMAID,
        "description": "Auto-generated diagram",
    }


def test_plain_text_actions_pass_through_unparsed():
    raw = '  {"looks": "like json"}  '
    assert normalize_response(Action.translate, raw) == {"text": raw}
    assert normalize_response(Action.rephrase, "") == {"text": ""}


@pytest.mark.parametrize("raw", ["NaN", '{"title": Infinity}', '{"simple": [{"wordCount": -Infinity}]}'])
def test_non_standard_json_constants_fall_back(raw):
    assert normalize_response(Action.generate_visual, raw)["mermaidCode"] == FALLBACK_MERMAID
    assert normalize_response(Action.variations, raw)["variations"][0]["suggestedText"] == raw
