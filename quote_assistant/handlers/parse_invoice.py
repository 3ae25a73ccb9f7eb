"""
AWS Lambda handler for supplier invoice extraction.

Proxies a base64 PDF and the caller's own Anthropic API key to the Messages API
so the browser never calls the API directly. The upstream reply is returned as is.
"""

import logging
from typing import Any, Dict, Optional

from ..core.anthropic_client import AnthropicClient
from ..core.errors import BadRequest, QuoteAssistantError
from ..core.invoice_parser import extract_invoice
from ..utils.config import Settings, load_settings
from ..utils.logger import setup_logger
from .http import error_response, json_response, parse_body, require_post


SERVICE_NAME = "quote-assistant"


def process_request(event: Dict[str, Any], settings: Settings, client: Optional[AnthropicClient] = None,
                    logger: Optional[logging.Logger] = None) -> Dict[str, Any]:
    """
    Handle one parse-invoice request.

    Args:
        event: API Gateway proxy event with a JSON body ``{apiKey, pdfBase64}``
        settings: Server configuration (model, token limit, endpoint)
        client: Client to use instead of one built from the request's apiKey
        logger: Logger instance for logging output

    Returns:
        API Gateway proxy response
    """
    logger = logger or logging.getLogger(SERVICE_NAME)

    try:
        require_post(event)
        body = parse_body(event)

        api_key = body.get("apiKey")
        pdf_base64 = body.get("pdfBase64")
        if not api_key or not pdf_base64:
            raise BadRequest("Missing apiKey or pdfBase64")

        logger.info(f"Parsing invoice ({len(pdf_base64)} base64 chars)")
        if client is None:
            client = AnthropicClient.from_settings(settings, api_key=api_key, logger=logger)

        reply = extract_invoice(client, pdf_base64, settings.invoice_model, settings.max_tokens)
        logger.info("Invoice parsed successfully")
        return json_response(200, reply)

    except QuoteAssistantError as e:
        logger.warning(f"Parse invoice request failed ({e.status_code}): {e.message}")
        return error_response(e)
    except Exception as e:
        logger.error(f"Unexpected error in parse invoice handler: {str(e)}", exc_info=True)
        return error_response(e)


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """AWS Lambda entry point."""
    logger = setup_logger(SERVICE_NAME, enable_file_logging=False)
    try:
        settings = load_settings(resolve_api_key=False)
    except QuoteAssistantError as e:
        logger.error(f"Configuration error: {e.message}")
        return error_response(e)
    return process_request(event, settings, logger=logger)
