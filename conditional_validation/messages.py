"""
Message Templating

Substitutes ``{placeholder}`` tokens in error messages.
"""

import re
from typing import Any, Callable, Dict, Mapping

Translator = Callable[[str, Mapping[str, Any]], str]


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def format_message(message: str, params: Mapping[str, Any]) -> str:
    """
    Replace every key of ``params`` found in ``message`` with its value.

    Replacement is done in a single pass with the longest keys tried first,
    so substituted values are never themselves rescanned.

    Examples:
        >>> format_message("{attribute} cannot be blank.", {"{attribute}": "Country"})
        'Country cannot be blank.'
        >>> format_message("{value}!", {"{value}": None})
        '!'
    """
    if not params or not message:
        return message

    keys = sorted((k for k in params if k), key=len, reverse=True)
    if not keys:
        return message

    pattern = re.compile("|".join(re.escape(k) for k in keys))
    return pattern.sub(lambda m: _to_text(params[m.group(0)]), message)


def placeholders(**values: Any) -> Dict[str, Any]:
    """Build a ``{name}`` keyed parameter dictionary from keyword arguments."""
    return {f"{{{name}}}": value for name, value in values.items()}
