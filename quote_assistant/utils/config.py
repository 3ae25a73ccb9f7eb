"""
Runtime configuration for the quote assistant functions.

Settings are read from the process environment on every invocation and passed
explicitly to the handlers. When ``ANTHROPIC_API_KEY`` is not set but
``ANTHROPIC_API_KEY_SECRET_NAME`` is, the key is fetched from AWS Secrets Manager.
"""

import os
import json
from dataclasses import dataclass
from typing import Mapping, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.errors import ConfigurationError


DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
DEFAULT_INVOICE_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_PRICING_MODEL = "claude-sonnet-4-20250514"
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TIMEOUT = 120.0


@dataclass(frozen=True)
class Settings:
    """Server-side configuration injected into each handler call."""

    anthropic_api_key: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    api_version: str = DEFAULT_API_VERSION
    invoice_model: str = DEFAULT_INVOICE_MODEL
    pricing_model: str = DEFAULT_PRICING_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT


def _get_int(environ: Mapping[str, str], key: str, default: int) -> int:
    value = environ.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Environment variable {key} must be an integer") from e


def _get_float(environ: Mapping[str, str], key: str, default: float) -> float:
    value = environ.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"Environment variable {key} must be numeric") from e


def fetch_api_key_from_secrets_manager(secret_name: str, region_name: Optional[str] = None) -> Optional[str]:
    """
    Read the Anthropic API key from AWS Secrets Manager.

    The secret may hold the bare key or a JSON object with an ``ANTHROPIC_API_KEY`` field.

    Args:
        secret_name: Name or ARN of the secret
        region_name: AWS region (defaults to the boto3 session region)

    Returns:
        The API key, or None if the secret holds no usable value
    """
    client = boto3.client("secretsmanager", region_name=region_name)
    try:
        response = client.get_secret_value(SecretId=secret_name)
    except (ClientError, BotoCoreError) as e:
        raise ConfigurationError(f"Failed to load secret {secret_name}: {str(e)}") from e

    secret = (response.get("SecretString") or "").strip()
    if secret.startswith("{"):
        try:
            return json.loads(secret).get("ANTHROPIC_API_KEY") or None
        except ValueError as e:
            raise ConfigurationError(f"Secret {secret_name} is not valid JSON") from e
    return secret or None


def load_settings(environ: Optional[Mapping[str, str]] = None, resolve_api_key: bool = True) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)
        resolve_api_key: Fetch the key from Secrets Manager when it is not in the
            environment. Handlers that use a caller-supplied key pass False.

    Returns:
        Settings instance
    """
    if environ is None:
        environ = os.environ

    api_key = environ.get("ANTHROPIC_API_KEY") or None
    secret_name = environ.get("ANTHROPIC_API_KEY_SECRET_NAME")
    if not api_key and secret_name and resolve_api_key:
        api_key = fetch_api_key_from_secrets_manager(secret_name, environ.get("AWS_REGION"))

    return Settings(
        anthropic_api_key=api_key,
        api_url=environ.get("ANTHROPIC_API_URL") or DEFAULT_API_URL,
        api_version=environ.get("ANTHROPIC_VERSION") or DEFAULT_API_VERSION,
        invoice_model=environ.get("INVOICE_MODEL") or DEFAULT_INVOICE_MODEL,
        pricing_model=environ.get("PRICING_MODEL") or DEFAULT_PRICING_MODEL,
        max_tokens=_get_int(environ, "ANTHROPIC_MAX_TOKENS", DEFAULT_MAX_TOKENS),
        timeout=_get_float(environ, "ANTHROPIC_TIMEOUT", DEFAULT_TIMEOUT),
    )
