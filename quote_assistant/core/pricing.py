"""
Pricing strategy conversation builder.

Renders the caller's pricing options into a text table and wraps it in either
the full first-turn instruction or the short follow-up turn, after copying the
prior conversation through unchanged.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Sequence

from .models import ConversationMessage, LineItem, PricingAdvice, PricingOption
from .prompts import (
    FOLLOW_UP_TURN_TEMPLATE,
    INITIAL_TURN_TEMPLATE,
    LINE_ITEM_TEMPLATE,
    OPTION_TEMPLATE,
    PRICING_SYSTEM_PROMPT,
)
from .anthropic_client import response_text
from .response_shaper import shape_pricing_reply


def format_number(value: Any) -> str:
    """Render a number the way the browser client would print it (12.0 -> "12")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point rendering that rounds exact ties up, as the browser client does (0.125 -> "0.13")."""
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def format_line_item(item: LineItem) -> str:
    return LINE_ITEM_TEMPLATE.format(
        description=item.description,
        section=item.section,
        quantity=format_number(item.quantity),
        unit_price=format_number(item.unit_price),
    )


def format_option(option: PricingOption) -> str:
    return OPTION_TEMPLATE.format(
        name=option.name,
        tab_id=option.tab_id,
        cost_ex_gst=to_fixed(option.cost_ex_gst, 2),
        current_price_inc_gst=to_fixed(option.current_price_inc_gst, 2),
        current_profit_ex_gst=to_fixed(option.current_profit_ex_gst, 2),
        current_markup=to_fixed(option.current_markup, 1),
        current_margin=to_fixed(option.current_margin, 1),
        payment_term=format_number(option.payment_term),
        current_monthly=to_fixed(option.current_monthly, 2),
        items="\n".join(format_line_item(item) for item in option.items),
    )


def format_options_summary(options: Sequence[PricingOption]) -> str:
    """Render every option and its line items, separated by blank lines."""
    return "\n\n".join(format_option(option) for option in options)


def build_pricing_messages(user_message: str, options: Sequence[PricingOption],
                           project_name: Optional[str] = None, client_name: Optional[str] = None,
                           history: Optional[Sequence[ConversationMessage]] = None) -> List[Dict[str, Any]]:
    """
    Build the conversation sent to the model.

    Prior turns are copied through; a non-empty history switches the new user
    turn to the short follow-up form.

    Args:
        user_message: The user's new message
        options: Pricing options to render
        project_name: Project label for the first turn
        client_name: Client label for the first turn
        history: Prior conversation, oldest first

    Returns:
        Message list in Anthropic format
    """
    history = list(history or [])
    messages = [message.to_dict() for message in history]
    options_summary = format_options_summary(options)

    if history:
        content = FOLLOW_UP_TURN_TEMPLATE.format(
            user_message=user_message,
            options_summary=options_summary,
        )
    else:
        content = INITIAL_TURN_TEMPLATE.format(
            project_name=project_name or "",
            client_name=client_name or "",
            options_summary=options_summary,
            user_message=user_message,
        )

    messages.append({"role": "user", "content": content})
    return messages


def request_pricing_advice(client: Any, user_message: str, options: Sequence[PricingOption],
                           model: str, max_tokens: int, project_name: Optional[str] = None,
                           client_name: Optional[str] = None,
                           history: Optional[Sequence[ConversationMessage]] = None,
                           logger: Optional[Any] = None) -> PricingAdvice:
    """Run one pricing turn against the model and shape its reply."""
    messages = build_pricing_messages(
        user_message,
        options,
        project_name=project_name,
        client_name=client_name,
        history=history,
    )
    reply = client.create_message(messages, model=model, max_tokens=max_tokens, system=PRICING_SYSTEM_PROMPT)
    return shape_pricing_reply(response_text(reply), logger=logger)
