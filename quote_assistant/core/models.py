"""
Request and response values for the pricing handler.

All of these live for a single request only. Field names on the wire are
camelCase (the browser client's shape); attributes here are snake_case.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import BadRequest


def _number(data: Dict[str, Any], key: str, context: str) -> float:
    value = data.get(key)
    # bool is an int subclass but never a valid price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadRequest(f"{context}: '{key}' must be a number")
    return value


@dataclass
class LineItem:
    description: str
    section: str
    quantity: float
    unit_price: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any], context: str = "item") -> "LineItem":
        if not isinstance(data, dict):
            raise BadRequest(f"{context} must be an object")
        return cls(
            description=str(data.get("description", "")),
            section=str(data.get("section", "")),
            quantity=_number(data, "quantity", context),
            unit_price=_number(data, "unitPrice", context),
        )


@dataclass
class PricingOption:
    name: str
    tab_id: str
    cost_ex_gst: float
    current_price_inc_gst: float
    current_profit_ex_gst: float
    current_markup: float
    current_margin: float
    payment_term: float
    current_monthly: float
    items: List[LineItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PricingOption":
        """Parse one option from the request body, raising BadRequest on bad fields."""
        if not isinstance(data, dict):
            raise BadRequest("Each pricing option must be an object")
        context = f"Option '{data.get('name') or data.get('tabId') or '?'}'"

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise BadRequest(f"{context}: 'items' must be a list")

        return cls(
            name=str(data.get("name", "")),
            tab_id=str(data.get("tabId", "")),
            cost_ex_gst=_number(data, "costExGST", context),
            current_price_inc_gst=_number(data, "currentPriceIncGST", context),
            current_profit_ex_gst=_number(data, "currentProfitExGST", context),
            current_markup=_number(data, "currentMarkup", context),
            current_margin=_number(data, "currentMargin", context),
            payment_term=_number(data, "paymentTerm", context),
            current_monthly=_number(data, "currentMonthly", context),
            items=[
                LineItem.from_dict(item, f"{context} item {index}")
                for index, item in enumerate(raw_items, 1)
            ],
        )


@dataclass
class ConversationMessage:
    role: str
    content: Any

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationMessage":
        if not isinstance(data, dict) or "role" not in data:
            raise BadRequest("Each conversation message needs a 'role' and 'content'")
        return cls(role=data["role"], content=data.get("content", ""))

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


# Recommendations come from the model and are passed through as plain dicts:
#   {"tabId", "name", "costExGST", "suggestedPriceIncGST", "paymentTerm", "reasoning"}
Recommendation = Dict[str, Any]


@dataclass
class PricingAdvice:
    """Shaped reply of the pricing handler."""

    explanation: str
    recommendations: Optional[List[Recommendation]] = None
    text_message_summary: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "explanation": self.explanation,
            "recommendations": self.recommendations,
            "textMessageSummary": self.text_message_summary,
        }
