from __future__ import annotations

import math
import re
from typing import Optional

_NON_NUMERIC = re.compile(r"[^\d,.-]")


def parse_amount(value: Optional[str]) -> int:
    """Parse a rupiah amount typed by a user ("Rp 1.500.000", "250000", "12.500,50").

    Dots are thousand separators and a comma is the decimal mark. Anything that
    does not parse to a positive number yields 0.
    """

    if not value:
        return 0
    normalized = _NON_NUMERIC.sub("", value).replace(".", "").replace(",", ".", 1)
    try:
        parsed = float(normalized)
    except ValueError:
        return 0
    if parsed <= 0:
        return 0
    return int(math.floor(parsed + 0.5))
