"""
Key-ordered record tables with merge-based set algebra, plus the CSV loader,
text renderer and command line demo built around them.
"""

from .algebra import (  # noqa: F401
    SET_OPERATIONS,
    difference,
    intersection,
    symmetric_difference,
    union,
)
from .formatting import format_value  # noqa: F401
from .model import (  # noqa: F401
    Number,
    Property,
    PropertySet,
    PropertyValue,
    Record,
    Table,
    Text,
    make_value,
)

__version__ = "0.1.0"

__all__ = [
    "SET_OPERATIONS",
    "difference",
    "intersection",
    "symmetric_difference",
    "union",
    "format_value",
    "Number",
    "Property",
    "PropertySet",
    "PropertyValue",
    "Record",
    "Table",
    "Text",
    "make_value",
]
