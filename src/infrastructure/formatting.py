"""Display formatting helpers for dates and amounts."""

import re
from datetime import datetime

from src.infrastructure.settings import get_setting

_TOKEN_RE = re.compile(r"yyyy|yy|MM|M|dd|d")


def format_date(timestamp_ms: float, pattern: str) -> str:
    """Format an epoch-millisecond timestamp in local time.

    ``pattern`` uses the tokens ``yyyy``, ``yy``, ``MM``, ``M``, ``dd`` and
    ``d``; any other character is copied through, e.g. ``dd/MM/yyyy``.
    """
    moment = datetime.fromtimestamp(timestamp_ms / 1000)
    tokens = {
        "yyyy": f"{moment.year:04d}",
        "yy": f"{moment.year % 100:02d}",
        "MM": f"{moment.month:02d}",
        "M": str(moment.month),
        "dd": f"{moment.day:02d}",
        "d": str(moment.day),
    }
    return _TOKEN_RE.sub(lambda m: tokens[m.group(0)], pattern)


def format_money(amount: float) -> str:
    """Amount with the configured currency symbol, two decimals."""
    return f"{get_setting('currency')}{amount:,.2f}"
