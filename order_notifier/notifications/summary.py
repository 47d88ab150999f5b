"""
Product summary for the order confirmation template.

WhatsApp rejects template parameters above a hard length ceiling, so the
product list is compressed deterministically and never raises.
"""

from __future__ import annotations

from typing import Sequence

PRODUCT_SUMMARY_LIMIT = 60


def summarize(titles: Sequence[str], limit: int = PRODUCT_SUMMARY_LIMIT) -> str:
    """
    "Blue Shirt, Red Hat"      - everything fits
    "Blue Shirt & 4 more"      - first title plus a count
    "Very long fir... & more"  - first title truncated
    "Very long only ti..."     - single title truncated
    """
    full = ", ".join(titles)
    if len(full) <= limit:
        return full

    first = titles[0]
    others = len(titles) - 1
    if others == 0:
        return first[: limit - 3] + "..."

    short = f"{first} & {others} more"
    if len(short) <= limit:
        return short
    return first[: limit - 10] + "... & more"
