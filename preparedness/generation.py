"""
Generative text service — OpenAI chat completions.

Returns None whenever the model can't be reached, so callers can fall back
to deterministic content.
"""

from __future__ import annotations

import logging

from openai import AsyncOpenAI, OpenAIError

from preparedness import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an emergency preparedness expert who provides detailed, "
    "location-specific disaster preparedness plans."
)


async def complete(
    prompt: str,
    *,
    json_mode: bool = False,
    max_tokens: int = 2000,
) -> str | None:
    """Send *prompt* and return the reply text, or None on any failure."""
    api_key = settings.openai_api_key()
    if not api_key:
        logger.warning("OPENAI_API_KEY not set — skipping generation")
        return None

    client = AsyncOpenAI(api_key=api_key, timeout=settings.external_timeout())
    kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
    try:
        response = await client.chat.completions.create(
            model=settings.openai_model(),
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=max_tokens,
            temperature=0.3,
            **kwargs,
        )
    except OpenAIError as exc:
        logger.error("OpenAI generation failed: %s", exc)
        return None

    content = response.choices[0].message.content if response.choices else None
    if not content:
        logger.warning("OpenAI returned an empty response")
        return None
    return content
