"""
Budget alert events - Decoding and validation of Pub/Sub budget notifications.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

Amount = Union[int, Decimal]


class MalformedEventError(ValueError):
    """Raised when a budget alert payload cannot be decoded or parsed."""


def _parse_amount(payload: Dict[str, Any], field: str) -> Amount:
    if field not in payload:
        raise MalformedEventError(f"Budget alert is missing '{field}'")

    value = payload[field]
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise MalformedEventError(f"Budget alert field '{field}' is not a number: {value!r}")

    return value


def format_amount(amount: Amount) -> str:
    """Render an amount the way it reads as a JSON number (50.0 -> 50, 100.10 -> 100.1)."""
    if isinstance(amount, Decimal):
        if amount == amount.to_integral_value():
            return str(int(amount))
        return str(amount.normalize())
    return str(amount)


@dataclass(frozen=True)
class BudgetAlertEvent:
    """A single budget notification as published by Cloud Billing."""

    budget_id: Optional[str]
    cost_amount: Amount
    budget_amount: Amount
    budget_display_name: Optional[str] = None
    billing_account_id: Optional[str] = None
    currency_code: Optional[str] = None

    @property
    def over_budget(self) -> bool:
        return self.cost_amount > self.budget_amount

    @classmethod
    def from_cloud_event(cls, cloud_event) -> "BudgetAlertEvent":
        """
        Build an event from a Pub/Sub CloudEvent.

        Args:
            cloud_event: CloudEvent whose data holds the Pub/Sub message

        Returns:
            BudgetAlertEvent

        Raises:
            MalformedEventError: If the envelope or payload is invalid
        """
        try:
            message = cloud_event.data["message"]
            data = message["data"]
        except (KeyError, TypeError) as e:
            raise MalformedEventError(f"Pub/Sub envelope is missing message data: {e}") from e

        attributes = message.get("attributes") or {}
        return decode_budget_alert(data, attributes)


def decode_budget_alert(
    data: Union[str, bytes], attributes: Optional[Dict[str, str]] = None
) -> BudgetAlertEvent:
    """
    Decode a base64-encoded budget alert payload.

    Floating point amounts are parsed as Decimal, integers are kept as int so
    amounts render exactly as they were published.

    Args:
        data: Base64-encoded JSON payload
        attributes: Pub/Sub message attributes (budgetId, billingAccountId)

    Returns:
        BudgetAlertEvent

    Raises:
        MalformedEventError: If decoding, parsing or validation fails
    """
    attributes = attributes or {}

    try:
        raw = base64.b64decode(data, validate=True).decode("utf-8")
        payload = json.loads(raw, parse_float=Decimal)
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError) as e:
        raise MalformedEventError(f"Unable to decode budget alert payload: {e}") from e

    if not isinstance(payload, dict):
        raise MalformedEventError(
            f"Budget alert payload must be a JSON object, got {type(payload).__name__}"
        )

    event = BudgetAlertEvent(
        budget_id=attributes.get("budgetId") or None,
        cost_amount=_parse_amount(payload, "costAmount"),
        budget_amount=_parse_amount(payload, "budgetAmount"),
        budget_display_name=payload.get("budgetDisplayName"),
        billing_account_id=attributes.get("billingAccountId"),
        currency_code=payload.get("currencyCode"),
    )
    logger.debug("Decoded budget alert: %s", event)
    return event
