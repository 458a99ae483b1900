"""Map a generation request to the system/user prompt pair sent to the AI gateway."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from echowrite.core.config import settings
from echowrite.core.errors import InvalidInput, UnknownAction


class Action(str, Enum):
    variations = "variations"
    translate = "translate"
    rephrase = "rephrase"
    length_variations = "length-variations"
    generate_visual = "generate-visual"


STRUCTURED_ACTIONS = {Action.variations, Action.length_variations, Action.generate_visual}

LENGTH_TYPES = ("simple", "medium", "long")
VISUAL_TYPES = ("diagram", "flowchart", "mindmap", "timeline")

DEFAULT_STYLE = "Improve Phrasing"
DEFAULT_LANGUAGE = "English"
DEFAULT_LENGTH_TYPE = "medium"
DEFAULT_VISUAL_TYPE = "diagram"


class WritingStyle(str, Enum):
    professional_email = "Professional Email"
    follow_up_message = "Follow-Up Message"
    resume_cv_optimizer = "Resume/CV Optimizer"
    cover_letter = "Cover Letter"
    client_proposal = "Client Proposal"
    legal_draft = "Legal Draft"
    marketing_copy = "Marketing Copy"
    sales_pitch = "Sales Pitch"
    product_description = "Product Description"
    landing_page_copy = "Landing Page Copy"
    content_writing = "Content Writing"
    social_media_post = "Social Media Post"
    video_reel_script = "Video/Reel Script"
    humanizer = "Humanizer"
    simplify_language = "Simplify Language"
    polite_respectful = "Polite & Respectful"
    academic_writing = "Academic Writing"
    technical_doc = "Technical Doc"
    complaint_request = "Complaint/Request Letter"
    negotiation_message = "Negotiation Message"


STYLE_CATEGORIES: dict[str, list[WritingStyle]] = {
    "professional": [
        WritingStyle.professional_email,
        WritingStyle.follow_up_message,
        WritingStyle.resume_cv_optimizer,
        WritingStyle.cover_letter,
        WritingStyle.client_proposal,
    ],
    "legal": [WritingStyle.legal_draft],
    "marketing": [
        WritingStyle.marketing_copy,
        WritingStyle.sales_pitch,
        WritingStyle.product_description,
        WritingStyle.landing_page_copy,
    ],
    "content": [
        WritingStyle.content_writing,
        WritingStyle.social_media_post,
        WritingStyle.video_reel_script,
    ],
    "humanization": [
        WritingStyle.humanizer,
        WritingStyle.simplify_language,
        WritingStyle.polite_respectful,
    ],
    "academic": [WritingStyle.academic_writing, WritingStyle.technical_doc],
    "personal": [WritingStyle.complaint_request, WritingStyle.negotiation_message],
}


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: str = ""
    text: str = ""
    style: Optional[str] = None
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")
    length_type: Optional[str] = Field(default=None, alias="lengthType")
    visual_type: Optional[str] = Field(default=None, alias="visualType")


@dataclass(frozen=True)
class PromptPair:
    system: str
    user: str


JSON_ONLY = "IMPORTANT: Return ONLY the JSON, no markdown code blocks, no extra text."

VISUAL_PROMPTS = {
    "diagram": "Create a Mermaid.js diagram representing the concepts in the text. Use a simple graph TD format.",
    "flowchart": (
        "Create a Mermaid.js flowchart showing the process or workflow described. "
        "Use flowchart TD format with decision nodes where appropriate."
    ),
    "mindmap": "Create a Mermaid.js mindmap with the main concept in the center and branches for related ideas.",
    "timeline": "Create a Mermaid.js timeline showing events or steps chronologically. Use the timeline format.",
}

REPHRASE_PROMPTS = {
    "simple": "Rewrite this text to be shorter and much simpler. Use plain language and be very concise.",
    "medium": "Rewrite this text to be of moderate length. Ensure it is balanced, professional, and clear.",
    "long": (
        "Rewrite this text to be more detailed and comprehensive. "
        "Expand on the points while maintaining the same core message."
    ),
}


def parse_action(action: str | None) -> Action:
    try:
        return Action(action)
    except ValueError:
        raise UnknownAction()


def validate_request(req: GenerationRequest) -> Action:
    """Check text and action-specific parameters before any quota or relay work."""
    if not req.text or not req.text.strip():
        raise InvalidInput("Missing required fields: text and action")
    if len(req.text) > settings.max_text_length:
        raise InvalidInput(f"Text exceeds {settings.max_text_length} characters")
    if not req.action:
        raise InvalidInput("Missing required fields: text and action")

    action = parse_action(req.action)
    if req.length_type is not None and req.length_type not in LENGTH_TYPES:
        raise InvalidInput(f"Unsupported lengthType: {req.length_type}")
    if req.visual_type is not None and req.visual_type not in VISUAL_TYPES:
        raise InvalidInput(f"Unsupported visualType: {req.visual_type}")
    return action


def _variations_prompt(text: str, style: str) -> PromptPair:
    system = f"""You are an elite writing suite.
Generate 8 distinct variations of the user's text for the goal: {style}.
If the goal is '{WritingStyle.professional_email.value}', each variation MUST be a full email including a Subject Line, Greeting, Body, and Closing.

Return ONLY a valid JSON object with a 'variations' array. Each item has:
- 'id': unique string (v1, v2, v3, v4, v5, v6, v7, v8)
- 'label': e.g. 'Standard Polished', 'Formal', 'Friendly', 'Concise', 'Persuasive', 'Casual', 'Executive', 'Creative'
- 'suggestedText': the full refined text
- 'tone': short description of the tone
- 'changes': array of {{field: string, reason: string}} explaining key changes

{JSON_ONLY}"""
    return PromptPair(system=system, user=f"Refine this text into 8 variations:\n\n{text}")


def _length_variations_prompt(text: str) -> PromptPair:
    buckets = []
    for prefix, name, counts in (
        ("s", "simple", (10, 12, 8, 15, 11)),
        ("m", "medium", (40, 45, 38, 42, 50)),
        ("l", "long", (100, 120, 95, 110, 130)),
    ):
        items = ",\n".join(
            f'    {{"id": "{prefix}{i}", "text": "...", "wordCount": {n}}}' for i, n in enumerate(counts, start=1)
        )
        buckets.append(f'  "{name}": [\n{items}\n  ]')
    example = "{\n" + ",\n".join(buckets) + "\n}"

    system = f"""You are an elite writing suite.
Generate 5 variations for each length type (simple, medium, long) of the user's text.

For SIMPLE: Create 5 short, concise versions (1-2 sentences each)
For MEDIUM: Create 5 moderate length versions (3-5 sentences each)
For LONG: Create 5 detailed, comprehensive versions (6+ sentences each)

Return ONLY a valid JSON object with this structure:
{example}

{JSON_ONLY}"""
    user = f"Create 5 variations for each length type (simple, medium, long) of this text:\n\n{text}"
    return PromptPair(system=system, user=user)


def _visual_prompt(text: str, visual_type: str) -> PromptPair:
    if visual_type not in VISUAL_PROMPTS:
        raise InvalidInput(f"Unsupported visualType: {visual_type}")
    system = f"""You are a visual content generator. {VISUAL_PROMPTS[visual_type]}

Return ONLY a valid JSON object with this structure:
{{
  "title": "A short descriptive title",
  "mermaidCode": "graph TD\\n    A[Start] --> B[Process]\\n    B --> C[End]",
  "description": "Brief description of what this visual represents"
}}

Make sure the Mermaid code is valid and will render correctly. Use simple node names without special characters.
{JSON_ONLY}"""
    return PromptPair(system=system, user=f"Generate a {visual_type} for this content:\n\n{text}")


def _translate_prompt(text: str, language: str) -> PromptPair:
    system = (
        f"You are a professional translator. Translate the given text to {language}. \n"
        "Keep the same tone, formatting, and meaning. Return ONLY the translated text, nothing else."
    )
    return PromptPair(system=system, user=text)


def _rephrase_prompt(text: str, length_type: str) -> PromptPair:
    if length_type not in REPHRASE_PROMPTS:
        raise InvalidInput(f"Unsupported lengthType: {length_type}")
    system = REPHRASE_PROMPTS[length_type] + " Return ONLY the rephrased text, nothing else."
    return PromptPair(system=system, user=text)


def build_prompt(req: GenerationRequest) -> PromptPair:
    action = parse_action(req.action)

    if action is Action.variations:
        return _variations_prompt(req.text, req.style or DEFAULT_STYLE)
    if action is Action.length_variations:
        return _length_variations_prompt(req.text)
    if action is Action.generate_visual:
        return _visual_prompt(req.text, req.visual_type or DEFAULT_VISUAL_TYPE)
    if action is Action.translate:
        return _translate_prompt(req.text, req.target_language or DEFAULT_LANGUAGE)
    return _rephrase_prompt(req.text, req.length_type or DEFAULT_LENGTH_TYPE)
