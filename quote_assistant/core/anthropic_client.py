"""
Thin client for the Anthropic Messages API.

One POST per call, no retries. Non-success replies raise UpstreamError with the
upstream status code and error message so handlers can forward them unchanged.
"""

from typing import Any, Dict, List, Optional

import requests

from .errors import InternalError, UpstreamError


class AnthropicClient:
    """Sends prepared message payloads to the Anthropic Messages endpoint."""

    def __init__(self, api_key: str, api_url: str, api_version: str,
                 timeout: Optional[float] = None, logger: Optional[Any] = None):
        """
        Args:
            api_key: Anthropic API key (caller-supplied or from Settings)
            api_url: Messages endpoint URL
            api_version: Value of the anthropic-version header
            timeout: Socket timeout in seconds for the single request
            logger: Logger instance for logging output
        """
        self.api_key = api_key
        self.api_url = api_url
        self.api_version = api_version
        self.timeout = timeout
        self.logger = logger

    @classmethod
    def from_settings(cls, settings: Any, api_key: Optional[str] = None,
                      logger: Optional[Any] = None) -> "AnthropicClient":
        """Build a client from Settings, optionally overriding the API key."""
        return cls(
            api_key=api_key or settings.anthropic_api_key,
            api_url=settings.api_url,
            api_version=settings.api_version,
            timeout=settings.timeout,
            logger=logger,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def create_message(self, messages: List[Dict[str, Any]], model: str, max_tokens: int,
                       system: Optional[str] = None) -> Dict[str, Any]:
        """
        Call the Messages API.

        Args:
            messages: Conversation in Anthropic message format
            model: Model identifier
            max_tokens: Completion token limit
            system: Optional system instruction

        Returns:
            The decoded JSON reply

        Raises:
            UpstreamError: The API answered with a non-success status
            requests.RequestException: The request failed before a status was received
        """
        payload: Dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if system:
            payload["system"] = system

        if self.logger:
            self.logger.info(f"Calling Anthropic API: model={model}, messages={len(messages)}")

        response = requests.post(self.api_url, headers=self._headers(), json=payload, timeout=self.timeout)

        if not response.ok:
            message = _error_message(response)
            if self.logger:
                self.logger.error(f"Anthropic API returned {response.status_code}: {message}")
            raise UpstreamError(response.status_code, message)

        return response.json()


def _error_message(response: requests.Response) -> str:
    """Pull error.message out of an Anthropic error body, with a generic fallback."""
    try:
        body = response.json()
    except ValueError:
        return "API request failed"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return "API request failed"


def response_text(reply: Dict[str, Any]) -> str:
    """
    Return the text of the first content block of a Messages API reply.

    Raises:
        InternalError: The reply carries no text content
    """
    content = reply.get("content") or []
    if not content or not isinstance(content[0], dict) or "text" not in content[0]:
        raise InternalError("Anthropic API reply contained no text content")
    return content[0]["text"]
