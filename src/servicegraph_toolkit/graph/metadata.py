"""
Typed metadata bags for traffic graph nodes and edges.

Every value is stored as a tagged ``MetadataValue`` so that readers ask for the
kind they expect and get ``None`` back on absence or mismatch, rather than
failing on an unchecked cast.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..shared.exceptions import MetadataError, create_error_context

logger = logging.getLogger(__name__)


class MetadataKind(str, Enum):
    """Kinds of value a metadata entry can hold."""

    NUMBER = "number"
    FLAG = "flag"
    LABEL = "label"
    LABEL_SET = "labelSet"


@dataclass(frozen=True)
class MetadataValue:
    """A single tagged metadata value."""

    kind: MetadataKind
    value: float | bool | str | frozenset[str]

    @classmethod
    def of(cls, raw: Any) -> "MetadataValue":
        """Tag a raw Python value.

        Args:
            raw: bool, int, float, str, or a collection of strings. A mapping of
                name to bool is read as the set of names mapped to true.

        Returns:
            Tagged value

        Raises:
            MetadataError: If the value has no supported kind
        """
        if isinstance(raw, MetadataValue):
            return raw
        # bool is a subclass of int, check it first
        if isinstance(raw, bool):
            return cls(MetadataKind.FLAG, raw)
        if isinstance(raw, int | float):
            return cls(MetadataKind.NUMBER, float(raw))
        if isinstance(raw, str):
            return cls(MetadataKind.LABEL, raw)
        if isinstance(raw, Mapping):
            if all(isinstance(k, str) and isinstance(v, bool) for k, v in raw.items()):
                return cls(MetadataKind.LABEL_SET, frozenset(k for k, v in raw.items() if v))
        elif isinstance(raw, list | tuple | set | frozenset):
            if all(isinstance(item, str) for item in raw):
                return cls(MetadataKind.LABEL_SET, frozenset(raw))

        raise MetadataError(
            "Unsupported metadata value", create_error_context(type=type(raw).__name__)
        )


class Metadata(Mapping[str, MetadataValue]):
    """Read-only mapping of attribute name to tagged value."""

    def __init__(self, values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None):
        self._values: dict[str, MetadataValue] = {}
        if values is None:
            return

        items = values.items() if isinstance(values, Mapping) else values
        for key, raw in items:
            if raw is None:
                continue
            try:
                self._values[key] = MetadataValue.of(raw)
            except MetadataError as e:
                logger.warning(f"Skipping metadata '{key}': {e}")

    def __getitem__(self, key: str) -> MetadataValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        values = {k: v.value for k, v in self._values.items()}
        return f"Metadata({values!r})"

    def _get(self, key: str, kind: MetadataKind) -> Any:
        entry = self._values.get(key)
        if entry is None:
            return None
        if entry.kind is not kind:
            logger.debug(f"Metadata '{key}' is {entry.kind.value}, expected {kind.value}")
            return None
        return entry.value

    def get_number(self, key: str) -> float | None:
        """Return a numeric value, or None if absent or not a number."""
        return self._get(key, MetadataKind.NUMBER)

    def get_flag(self, key: str) -> bool | None:
        """Return a boolean value, or None if absent or not a flag."""
        return self._get(key, MetadataKind.FLAG)

    def get_label(self, key: str) -> str | None:
        """Return a string value, or None if absent or not a label."""
        return self._get(key, MetadataKind.LABEL)

    def get_labels(self, key: str) -> frozenset[str] | None:
        """Return a set of strings, or None if absent or not a label set."""
        return self._get(key, MetadataKind.LABEL_SET)

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly representation (label sets become sorted lists)."""
        result: dict[str, Any] = {}
        for key, entry in self._values.items():
            if entry.kind is MetadataKind.LABEL_SET:
                result[key] = sorted(entry.value)  # type: ignore[arg-type]
            else:
                result[key] = entry.value
        return result
