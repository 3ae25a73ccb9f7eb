import pytest

from quote_assistant.core.errors import BadRequest
from quote_assistant.core.models import ConversationMessage, PricingOption
from quote_assistant.core.pricing import (
    build_pricing_messages,
    format_number,
    format_options_summary,
    request_pricing_advice,
    to_fixed,
)
from quote_assistant.core.prompts import PRICING_SYSTEM_PROMPT

from conftest import text_reply


@pytest.fixture
def options(option_dicts):
    return [PricingOption.from_dict(option) for option in option_dicts]


def test_format_number_drops_integral_fraction():
    assert format_number(12) == "12"
    assert format_number(12.0) == "12"
    assert format_number(999.5) == "999.5"


@pytest.mark.parametrize("value, digits, expected", [
    (0.125, 2, "0.13"),
    (1.005, 2, "1.00"),
    (2000, 2, "2000.00"),
    (137.5, 2, "137.50"),
    (33.25, 1, "33.3"),
    (33.333, 1, "33.3"),
    (-0.125, 2, "-0.13"),
])
def test_to_fixed_rounds_ties_up(value, digits, expected):
    assert to_fixed(value, digits) == expected


def test_option_table_rounds_half_cent_up(option_dicts):
    option_dicts[0]["currentMonthly"] = 0.125
    option_dicts[0]["currentMarkup"] = 12.25

    summary = format_options_summary([PricingOption.from_dict(option_dicts[0])])

    assert "- Current Monthly: $0.13/mo" in summary
    assert "- Current Markup: 12.3%" in summary


def test_options_summary_renders_every_option(options):
    summary = format_options_summary(options)

    assert "**Premium** (ID: tab-1)" in summary
    assert "- Cost (Ex GST): $2000.00" in summary
    assert "- Current Price (Inc GST): $3300.00" in summary
    assert "- Current Margin: 33.3%" in summary
    assert "- Payment Term: 24 months" in summary
    assert "- Current Monthly: $137.50/mo" in summary
    assert "  - 4K Camera (CCTV): 4 x $250" in summary
    assert "  - NVR (CCTV): 1 x $999.5" in summary
    assert "**Basic** (ID: tab-2)" in summary
    assert summary.index("Premium") < summary.index("Basic")
    assert "\n\n\n**Basic**" in summary


def test_initial_turn_includes_full_instructions(options):
    messages = build_pricing_messages(
        "Client wants cameras at the front gate",
        options,
        project_name="Gate CCTV",
        client_name="Smith",
    )

    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    content = messages[0]["content"]
    assert content.startswith("Project: Gate CCTV\nClient: Smith\n\nMy Pricing Options:\n")
    assert "Context from me:\nClient wants cameras at the front gate" in content
    assert "I need your help pricing these options strategically." in content
    assert '"recommendations": [' in content
    assert '"textMessageSummary":' in content
    assert "{{" not in content


def test_follow_up_turn_keeps_history_and_omits_instructions(options):
    history = [
        ConversationMessage(role="user", content="First question"),
        ConversationMessage(role="assistant", content="First answer"),
    ]

    messages = build_pricing_messages("Can we push Premium higher?", options, history=history)

    assert messages[:2] == [
        {"role": "user", "content": "First question"},
        {"role": "assistant", "content": "First answer"},
    ]
    final = messages[-1]
    assert final["role"] == "user"
    assert final["content"].startswith("Can we push Premium higher?\n\nCurrent options data for reference:\n")
    assert "**Premium** (ID: tab-1)" in final["content"]
    assert "respond conversationally without JSON" in final["content"]
    assert "I need your help pricing these options strategically" not in final["content"]
    assert "Project:" not in final["content"]


def test_request_pricing_advice_sends_system_prompt(fake_client, options):
    fake_client.create_message.return_value = text_reply(
        'Anchor with Premium.\n{"recommendations": [{"tabId": "tab-1"}], "textMessageSummary": "Hi"}'
    )

    advice = request_pricing_advice(fake_client, "Help", options, model="m", max_tokens=10)

    args, kwargs = fake_client.create_message.call_args
    assert kwargs["system"] == PRICING_SYSTEM_PROMPT
    assert kwargs["model"] == "m"
    assert kwargs["max_tokens"] == 10
    assert args[0][-1]["role"] == "user"
    assert advice.explanation == "Anchor with Premium."
    assert advice.recommendations == [{"tabId": "tab-1"}]


def test_option_with_missing_number_is_rejected(option_dicts):
    del option_dicts[0]["costExGST"]

    with pytest.raises(BadRequest, match="costExGST"):
        PricingOption.from_dict(option_dicts[0])


def test_line_item_with_string_price_is_rejected(option_dicts):
    option_dicts[1]["items"][0]["unitPrice"] = "150"

    with pytest.raises(BadRequest, match="unitPrice"):
        PricingOption.from_dict(option_dicts[1])


def test_system_prompt_carries_rounding_conventions():
    assert "$2,995 not $2,847" in PRICING_SYSTEM_PROMPT
    assert "$125/mo not $118.62/mo" in PRICING_SYSTEM_PROMPT
