"""
Order Notifier
Destination phone normalisation for WhatsApp template sends.

Best-effort only. This is a heuristic, not validation: malformed numbers are
passed through unchanged and surface later as a Meta API rejection.
"""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")


class PhoneNormalizer:
    def __init__(self, default_country_code: str = "91", national_number_length: int = 10) -> None:
        self._country_code = default_country_code
        self._national_length = national_number_length

    def normalize(self, raw: str | None) -> str:
        """
        - strip every non-digit ("+91 98765-43210" -> "919876543210")
        - a bare national number gets the default country code prepended
        - anything else is returned as digits only
        """
        digits = _NON_DIGITS.sub("", raw or "")
        if not digits.startswith(self._country_code) and len(digits) == self._national_length:
            return self._country_code + digits
        return digits
