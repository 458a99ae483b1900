import logging

from fastapi import APIRouter, Depends

from echowrite.api.deps import RequestContext, get_request_context
from echowrite.services import usage_gate
from echowrite.services.ai_relay import AIRelay, get_ai_relay
from echowrite.services.prompt_builder import STYLE_CATEGORIES, GenerationRequest, build_prompt, validate_request
from echowrite.services.response_normalizer import normalize_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["echowrite"])


@router.post("/echowrite")
async def generate(
    req: GenerationRequest,
    ctx: RequestContext = Depends(get_request_context),
    relay: AIRelay = Depends(get_ai_relay),
):
    action = validate_request(req)
    user_id = ctx.identity.user_id

    ctx.usage = await usage_gate.check_quota(ctx.db, user_id)
    logger.info(
        "Processing %s request for text length: %d (usage %d/%d, role %s)",
        action.value,
        len(req.text),
        ctx.usage.usage_count,
        ctx.usage.max_usage,
        ctx.usage.role,
    )
    # Release the pooled connection while waiting on the gateway; record_usage re-checks atomically.
    await ctx.db.rollback()

    prompt = build_prompt(req)
    content = await relay.complete(prompt)
    logger.info("AI response received for %s, length: %d", action.value, len(content))

    result = normalize_response(action, content)
    await usage_gate.record_usage(ctx.db, user_id)
    return result


@router.get("/echowrite/styles")
async def list_styles():
    return {category: [style.value for style in styles] for category, styles in STYLE_CATEGORIES.items()}
