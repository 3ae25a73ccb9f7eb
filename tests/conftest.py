import sys
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root is on sys.path to allow `import quote_assistant` and `import cli`
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from quote_assistant.utils.config import Settings  # noqa: E402


@pytest.fixture
def settings():
    return Settings(anthropic_api_key="sk-server-key")


@pytest.fixture
def option_dicts():
    return [
        {
            "name": "Premium",
            "tabId": "tab-1",
            "costExGST": 2000,
            "currentPriceIncGST": 3300,
            "currentProfitExGST": 1000,
            "currentMarkup": 50,
            "currentMargin": 33.333,
            "paymentTerm": 24,
            "currentMonthly": 137.5,
            "items": [
                {"description": "4K Camera", "section": "CCTV", "quantity": 4, "unitPrice": 250},
                {"description": "NVR", "section": "CCTV", "quantity": 1, "unitPrice": 999.5},
            ],
        },
        {
            "name": "Basic",
            "tabId": "tab-2",
            "costExGST": 1000,
            "currentPriceIncGST": 1650,
            "currentProfitExGST": 500,
            "currentMarkup": 50,
            "currentMargin": 33.3,
            "paymentTerm": 12,
            "currentMonthly": 137.5,
            "items": [
                {"description": "1080p Camera", "section": "CCTV", "quantity": 2, "unitPrice": 150},
            ],
        },
    ]


def make_event(body=None, method="POST"):
    """Build an API Gateway REST proxy event."""
    return {
        "httpMethod": method,
        "body": json.dumps(body) if body is not None else None,
        "isBase64Encoded": False,
    }


def text_reply(text):
    """Anthropic Messages API reply with a single text block."""
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
    }


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.create_message.return_value = text_reply("Sounds good.")
    return client
