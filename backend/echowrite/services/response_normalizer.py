"""Turn raw gateway text into the result shape each action promises.

Structured actions never fail on malformed output: a degraded result carrying
the raw text is substituted so the caller always has something to render.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict

from echowrite.services.prompt_builder import Action, STRUCTURED_ACTIONS

logger = logging.getLogger(__name__)

FALLBACK_MERMAID = "graph TD\n    A[Content] --> B[Analysis]"


def strip_code_fence(content: str) -> str:
    cleaned = content.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def fallback_result(action: Action, content: str) -> Dict[str, Any]:
    if action is Action.variations:
        return {
            "variations": [
                {
                    "id": "v1",
                    "label": "Refined",
                    "suggestedText": content,
                    "tone": "Professional",
                    "changes": [{"field": "overall", "reason": "AI-enhanced content"}],
                }
            ]
        }
    if action is Action.length_variations:
        return {
            "simple": [{"id": "s1", "text": content[:100], "wordCount": 15}],
            "medium": [{"id": "m1", "text": content[:300], "wordCount": 50}],
            "long": [{"id": "l1", "text": content, "wordCount": 100}],
        }
    return {
        "title": "Generated Visual",
        "mermaidCode": FALLBACK_MERMAID,
        "description": "Auto-generated diagram",
    }


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON and cannot be rendered back out.
    raise ValueError(f"non-standard JSON constant {name}")


def normalize_response(action: Action, content: str) -> Any:
    if action not in STRUCTURED_ACTIONS:
        return {"text": content}

    try:
        return json.loads(strip_code_fence(content), parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning("JSON parse error for %s (%s); using fallback, content length %d", action.value, e, len(content))
        return fallback_result(action, content)
