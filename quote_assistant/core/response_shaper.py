"""
Separate the model's pricing explanation from its embedded JSON recommendations.

The model is asked to finish its prose with a raw JSON object holding
``recommendations`` and ``textMessageSummary``. It does not always comply: the
object may be fenced, preceded by other brace-delimited text, malformed, or
missing entirely on conversational follow-ups. Missing or malformed JSON is not
an error; the whole reply then becomes the explanation.
"""

import re
import json
from typing import Any, Dict, Optional, Tuple

from .models import PricingAdvice


RECOMMENDATIONS_KEY = "recommendations"
SUMMARY_KEY = "textMessageSummary"

_TRAILING_FENCE_RE = re.compile(r"```(?:json)?\s*$", re.IGNORECASE)

_decoder = json.JSONDecoder()


def _balanced_end(text: str, start: int) -> int:
    """
    Return the index just past the brace that closes the ``{`` at ``start``.

    Only braces are counted; an unclosed block runs to the end of the text.
    """
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return len(text)


def find_recommendations_block(text: str, logger: Optional[Any] = None) -> Optional[Tuple[int, int, Dict[str, Any]]]:
    """
    Find the first balanced JSON object whose top level has a ``recommendations`` key.

    Each ``{`` is tried as the start of a JSON value. Objects that decode but
    lack the key are skipped whole, and so is the brace-balanced span of a
    candidate that fails to decode, so nested objects are never considered.

    Args:
        text: Reply text to scan
        logger: Optional logger for skipped candidates

    Returns:
        Tuple of (start, end, parsed object), or None if no such object exists
    """
    pos = text.find("{")
    while pos != -1:
        try:
            parsed, end = _decoder.raw_decode(text, pos)
        except ValueError as e:
            if logger:
                logger.debug(f"Skipping malformed JSON candidate at offset {pos}: {e}")
            pos = text.find("{", _balanced_end(text, pos))
            continue

        if isinstance(parsed, dict) and RECOMMENDATIONS_KEY in parsed:
            return pos, end, parsed
        pos = text.find("{", end)
    return None


def shape_pricing_reply(text: str, logger: Optional[Any] = None) -> PricingAdvice:
    """
    Split a pricing reply into explanation, recommendations and text-message summary.

    Args:
        text: Raw text content of the model's reply

    Returns:
        PricingAdvice; ``recommendations`` is None when the reply carried no
        usable JSON block
    """
    text = text.strip()

    block = find_recommendations_block(text, logger=logger)
    if block is None:
        return PricingAdvice(explanation=text)

    start, _, parsed = block
    explanation = _TRAILING_FENCE_RE.sub("", text[:start]).strip()

    recommendations = parsed.get(RECOMMENDATIONS_KEY)
    if not isinstance(recommendations, list):
        recommendations = []

    return PricingAdvice(
        explanation=explanation,
        recommendations=recommendations,
        text_message_summary=parsed.get(SUMMARY_KEY) or "",
    )
