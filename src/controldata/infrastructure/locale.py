"""Process-wide locale and timezone set-up for timestamp rendering.

Timestamps are rendered through the C library's localtime() and strftime(),
which read LC_TIME and TZ from process state. Call this once at start-up,
before the first control file is formatted.
"""

from __future__ import annotations

import locale
import time

from controldata.infrastructure.logging import get_logger


def setup_time_locale(name: str = "") -> str:
    """
    Apply an LC_TIME locale and reload timezone rules.

    Args:
        name: Locale name, or "" to take it from the environment

    Returns:
        The locale actually in effect

    Raises:
        locale.Error: If the requested locale is not installed
    """
    applied = locale.setlocale(locale.LC_TIME, name)
    if hasattr(time, "tzset"):
        time.tzset()

    get_logger(__name__).debug("time_locale_configured", requested=name, applied=applied)
    return applied
