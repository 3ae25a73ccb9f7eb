"""
AWS Lambda handler for AI pricing recommendations.

Sends the caller's pricing options (and any prior conversation) to the model
using the server-held API key, then splits the reply into an explanation,
structured recommendations and a ready-to-send client text message.
"""

import logging
from typing import Any, Dict, Optional

from ..core.anthropic_client import AnthropicClient
from ..core.errors import BadRequest, ConfigurationError, QuoteAssistantError
from ..core.models import ConversationMessage, PricingOption
from ..core.pricing import request_pricing_advice
from ..utils.config import Settings, load_settings
from ..utils.logger import setup_logger
from .http import error_response, json_response, parse_body, require_post


SERVICE_NAME = "quote-assistant"


def process_request(event: Dict[str, Any], settings: Settings, client: Optional[AnthropicClient] = None,
                    logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Handle one ai-pricing request.

    Args:
        event: API Gateway proxy event with a JSON body
            ``{userMessage, projectName, clientName, options, conversationHistory}``
        settings: Server configuration; must carry the Anthropic API key
        client: Client to use instead of one built from settings
        logger: Logger instance for logging output

    Returns:
        API Gateway proxy response
    """
    logger = logger or logging.getLogger(SERVICE_NAME)

    try:
        require_post(event)
        body = parse_body(event)

        if not settings.anthropic_api_key:
            raise ConfigurationError("Server not configured: missing ANTHROPIC_API_KEY.")

        user_message = body.get("userMessage")
        raw_options = body.get("options")
        if not user_message or not raw_options:
            raise BadRequest("Missing required fields")
        if not isinstance(raw_options, list):
            raise BadRequest("'options' must be a list")

        options = [PricingOption.from_dict(option) for option in raw_options]
        history = [ConversationMessage.from_dict(message) for message in body.get("conversationHistory") or []]

        logger.info(f"Pricing request: {len(options)} options, {len(history)} prior messages")
        if client is None:
            client = AnthropicClient.from_settings(settings, logger=logger)

        advice = request_pricing_advice(
            client,
            user_message,
            options,
            model=settings.pricing_model,
            max_tokens=settings.max_tokens,
            project_name=body.get("projectName"),
            client_name=body.get("clientName"),
            history=history,
            logger=logger,
        )
        if advice.recommendations is None:
            logger.info("Reply carried no recommendations block")
        elif isinstance(advice.recommendations, list):
            logger.info(f"Extracted {len(advice.recommendations)} recommendations")
        return json_response(200, advice.to_dict())

    except QuoteAssistantError as e:
        logger.warning(f"AI pricing request failed ({e.status_code}): {e.message}")
        return error_response(e)
    except Exception as e:
        logger.error(f"AI Pricing Error: {str(e)}", exc_info=True)
        return error_response(e)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda entry point."""
    logger = setup_logger(SERVICE_NAME, enable_file_logging=False)
    try:
        settings = load_settings()
    except QuoteAssistantError as e:
        logger.error(f"Configuration error: {e.message}")
        return error_response(e)
    return process_request(event, settings, logger=logger)
