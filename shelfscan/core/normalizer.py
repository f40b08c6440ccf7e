"""Normalizes locale-variant price text into a canonical Decimal."""

import re
from decimal import Decimal, InvalidOperation

_NOT_NUMERIC = re.compile(r'[^0-9.,]')
_SEPARATORS = '.,'


def normalize_price(text: object) -> Decimal | None:
    """Convert price text such as '1.299,50 €' into a Decimal.

    Everything except digits, '.' and ',' is discarded. When only one
    separator is left it is the decimal point. When several are left, the
    last one is the decimal point and the earlier ones are dropped as
    thousands separators, so '1.299,50' and '1,299.50' both give 1299.50.

    Args:
        text: Raw price text scraped from a document

    Returns:
        The price as a non-negative Decimal, or None if the text holds no usable number.
        Never raises.

    """
    if not isinstance(text, str):
        return None

    cleaned = _NOT_NUMERIC.sub('', text)
    if not any(ch.isdigit() for ch in cleaned):
        return None

    last = max(cleaned.rfind(sep) for sep in _SEPARATORS)
    if last >= 0:
        integer_part = cleaned[:last].replace('.', '').replace(',', '')
        cleaned = f'{integer_part}.{cleaned[last + 1 :]}'

    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None

    if not value.is_finite() or value < 0:
        return None
    return value
