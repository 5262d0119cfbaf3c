from __future__ import annotations

from .model import Number, PropertyValue, Text


def format_value(value: PropertyValue) -> str:
    """
    Render a property value as text.

    Text passes through unchanged. Numbers use fixed six-decimal notation
    (``3.3`` -> ``"3.300000"``), independent of the process locale.
    """

    if isinstance(value, Text):
        return value.value
    if isinstance(value, Number):
        return f"{value.value:f}"
    raise TypeError(f"Unsupported property value type: {type(value).__name__}")
