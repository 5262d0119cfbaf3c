from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Tuple

VALUE_KINDS: Tuple[str, ...] = ("numeric", "text", "auto")


def clean_header_name(name: str) -> str:
    """
    Normalise a CSV header for matching: collapse whitespace, and reduce a
    header made of one phrase repeated (``"Name NAME"``) to that phrase.
    """
    words = str(name or "").split()
    folded = [word.casefold() for word in words]
    for size in range(1, len(words) // 2 + 1):
        repeats, remainder = divmod(len(words), size)
        if not remainder and folded == folded[:size] * repeats:
            return " ".join(words[:size])
    return " ".join(words)


def header_key(name: str) -> str:
    """Comparison form of a header: cleaned and case-folded."""

    return clean_header_name(name).casefold()


def match_headers(headers: Iterable[str]) -> Dict[str, str]:
    """Map header_key -> raw header; the first raw header wins on collisions."""

    matched: Dict[str, str] = {}
    for raw in headers:
        matched.setdefault(header_key(raw), raw)
    return matched


@dataclass(frozen=True)
class ColumnSpec:
    """A CSV column loaded as a record property."""

    column: str
    kind: str = "numeric"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.column:
            raise ValueError("ColumnSpec.column must be a non-empty string")
        if self.kind not in VALUE_KINDS:
            raise ValueError(f"Unknown value kind '{self.kind}' (expected one of {', '.join(VALUE_KINDS)})")

    @property
    def property_name(self) -> str:
        return self.name or self.column


@dataclass(frozen=True)
class SourceSchema:
    """Which columns of a source file make up the key, the name and the properties."""

    key_column: str
    properties: Sequence[ColumnSpec] = field(default_factory=tuple)
    name_column: Optional[str] = None
    file_extension: str = ".csv"

    def __post_init__(self) -> None:
        if not self.key_column:
            raise ValueError("SourceSchema.key_column must be a non-empty string")
        object.__setattr__(self, "properties", tuple(self.properties))
        object.__setattr__(self, "file_extension", normalize_extension(self.file_extension))

    @property
    def display_column(self) -> str:
        return self.name_column or self.key_column


def normalize_extension(extension: str) -> str:
    ext = str(extension).strip().lower()
    if not ext:
        raise ValueError("File extension must be a non-empty string")
    return ext if ext.startswith(".") else f".{ext}"


DEFAULT_SCHEMA = SourceSchema(
    key_column="Molecule",
    properties=(
        ColumnSpec("Solubility"),
        ColumnSpec("Molecular Weight"),
    ),
)
