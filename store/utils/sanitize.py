# store/utils/sanitize.py
import html
from typing import Any, Dict

import nh3


def sanitize(value: Any) -> Any:
    """
    Strip markup from free text before it is stored. Non-strings pass through.

    Plain text (ampersands, quotes, a lone "<") is kept exactly as typed. Only
    when the cleaner actually removed something is its output stored instead.
    """
    if not isinstance(value, str):
        return value
    cleaned = nh3.clean(value, tags=set())
    if html.unescape(cleaned) == value:
        return value
    return cleaned


def supplied_values(fields: Dict[str, Any], columns: Dict[str, str]) -> Dict[str, Any]:
    """
    Map the payload keys that were actually supplied onto column names,
    sanitizing each value. Keys missing from `fields`, None and "" are left out.
    """
    values = {}
    for key, column in columns.items():
        value = fields.get(key)
        if value is None or value == "":
            continue
        values[column] = sanitize(value)
    return values
