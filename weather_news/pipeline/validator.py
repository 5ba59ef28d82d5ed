"""Zipcode validator for US zipcode format checks.

Accepts the 5-digit form (``12345``) and ZIP+4 (``12345-6789``). Outbound API
calls always use the 5-digit form returned by :func:`normalize`.

Usage:
    python -m weather_news.pipeline.validator 94040 12345-6789 1234
"""

import re
import sys
from typing import Optional

from weather_news.core.errors import InvalidInputError

_ZIPCODE_RE = re.compile(r"^\d{5}(-\d{4})?$", re.ASCII)


def is_valid(zipcode: Optional[str]) -> bool:
    """Return True if ``zipcode`` (after trimming) is a US zipcode.

    Args:
        zipcode: Raw user input; ``None`` is treated as invalid.

    Returns:
        ``True`` for ``12345`` or ``12345-6789``, ``False`` otherwise.
    """
    if zipcode is None:
        return False
    return _ZIPCODE_RE.match(zipcode.strip()) is not None


def normalize(zipcode: Optional[str]) -> str:
    """Return the 5-digit form of a valid zipcode.

    Examples:
        ``"12345-6789"`` → ``"12345"``
        ``" 12345 "`` → ``"12345"``

    Raises:
        InvalidInputError: If ``zipcode`` is not a valid US zipcode.
    """
    if not is_valid(zipcode):
        raise InvalidInputError(
            f"Invalid US zipcode format: {zipcode!r}. Expected 12345 or 12345-6789"
        )
    return zipcode.strip()[:5]


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: python -m weather_news.pipeline.validator <zipcode> [...]")
        return 1
    all_valid = True
    for raw in sys.argv[1:]:
        if is_valid(raw):
            print(f"VALID    {raw!r} → {normalize(raw)}")
        else:
            print(f"INVALID  {raw!r}")
            all_valid = False
    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
