import re
from typing import Optional

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_PRICE_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")


class InvalidPriceError(ValueError):
    """Raised when a price field does not hold a whole number."""


class PriceValidator:
    """Parses the price text field the same way for create and update."""

    @staticmethod
    def parse_price(raw) -> int:
        if isinstance(raw, bool):
            raise InvalidPriceError(f"Invalid price: {raw!r}")
        if isinstance(raw, int):
            value = raw
        else:
            text = "" if raw is None else str(raw)
            # int() alone would also accept "1_000" and non-ASCII digits
            if not _PRICE_PATTERN.match(text):
                raise InvalidPriceError(f"Invalid price: {text!r}")
            value = int(text.strip())
        if not INT32_MIN <= value <= INT32_MAX:
            raise InvalidPriceError(f"Price out of range: {value}")
        return value

    @staticmethod
    def is_valid_price(raw) -> bool:
        try:
            PriceValidator.parse_price(raw)
        except InvalidPriceError:
            return False
        return True


class TextValidator:
    """Name fields are sent verbatim."""

    @staticmethod
    def normalize_name(text: Optional[str]) -> str:
        if text is None:
            return ""
        return str(text)
