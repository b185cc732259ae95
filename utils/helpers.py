"""
General helpers
"""

import json
import re
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, List

from models.exceptions import MalformedResponse


_CODE_FENCE_START = re.compile(r'^```(?:json)?\s*', re.IGNORECASE)
_CODE_FENCE_END = re.compile(r'\s*```$')


class CustomJSONEncoder(json.JSONEncoder):
    """JSON encoder for prompt payloads"""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


def format_currency(value: float, symbol: str = "रू") -> str:
    """Format a value as currency, e.g. 'रू 1,250' or 'रू 99.50'"""
    amount = float(value)
    if amount.is_integer():
        return f"{symbol} {amount:,.0f}"
    return f"{symbol} {amount:,.2f}"


def extract_json_array(text: str) -> List[Any]:
    """Pull the JSON array out of a model reply that may be wrapped in prose or code fences"""
    if not text or not text.strip():
        raise MalformedResponse("Empty reply from AI")

    cleaned = text.strip()
    cleaned = _CODE_FENCE_START.sub('', cleaned)
    cleaned = _CODE_FENCE_END.sub('', cleaned)

    start = cleaned.find('[')
    if start == -1:
        raise MalformedResponse("No JSON array found in AI reply")

    # first complete array wins, trailing prose is ignored
    decoder = json.JSONDecoder()
    error = None
    while start != -1:
        try:
            data, _ = decoder.raw_decode(cleaned, start)
        except json.JSONDecodeError as e:
            error = error or e
        else:
            if isinstance(data, list):
                return data
        start = cleaned.find('[', start + 1)

    raise MalformedResponse(f"Invalid JSON in AI reply: {error}")


def clean_label(text: str) -> str:
    """Trim a one-word model reply down to the bare label"""
    if not text or not text.strip():
        return ""
    label = text.strip().splitlines()[0]
    return label.strip().strip('"\'`*.').strip()
