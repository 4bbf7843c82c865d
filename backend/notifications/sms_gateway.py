"""
SMS-to-email gateway addressing.

Carriers relay email sent to <number>@<gateway domain> to the phone as a text
message, so SMS delivery reuses the email sender with a different address.
"""

import re
from typing import Optional

from config.sms_gateways import PHONE_DIGITS, SMS_GATEWAYS


def normalize_phone(phone: str) -> str:
    """Strip everything except digits."""
    return re.sub(r"\D", "", phone)


def get_sms_gateway_email(phone: Optional[str], carrier: Optional[str]) -> Optional[str]:
    """
    Build the gateway address for a phone number and carrier.

    Args:
        phone: Phone number in any common format (e.g. "(555) 123-4567")
        carrier: Carrier key from config.sms_gateways

    Returns:
        Gateway email address, or None if the carrier is unknown, either value
        is missing, or the number is not a 10-digit US number
    """
    if not phone or not carrier:
        return None

    gateway = SMS_GATEWAYS.get(carrier)
    if not gateway:
        return None

    digits = normalize_phone(phone)
    if len(digits) != PHONE_DIGITS:
        return None

    return f"{digits}@{gateway['domain']}"
