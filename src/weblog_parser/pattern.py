"""
Column patterns describing one access-log layout.

A pattern is an ordered list of (field key, column index) pairs. Patterns
are plain configuration: they can be built in any state, and detection
rejects those that are unsorted or structurally invalid.
"""

from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple, Optional, Sequence, Union

from .exceptions import ConfigurationError
from .schema import FieldKey, key_name


class PatternField(NamedTuple):
    """One field of a pattern: which key sits in which column."""

    key: str
    index: int

    def __str__(self) -> str:
        return f"{self.key}:{self.index}"


FieldSpec = Union[PatternField, tuple[Union[FieldKey, str], int]]


@dataclass(frozen=True)
class Pattern:
    """
    Ordered (key, column) pairs for one log layout.

    Attributes:
        fields: Pattern fields in configured order

    Usage:
        pattern = Pattern([("address", 0), ("code", 1), ("bytes_sent", 2)])
        pattern.info()  # '[address:0, code:1, bytes_sent:2]'
    """

    fields: tuple[PatternField, ...]

    def __init__(self, fields: Iterable[FieldSpec]):
        normalized = tuple(PatternField(key_name(key), index) for key, index in fields)
        object.__setattr__(self, "fields", normalized)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    @property
    def keys(self) -> list[str]:
        """Field keys in pattern order."""
        return [f.key for f in self.fields]

    def is_sorted(self) -> bool:
        """Check that column indices are strictly increasing."""
        try:
            return all(a.index < b.index for a, b in zip(self.fields, self.fields[1:]))
        except TypeError:
            # Non-comparable indices
            return False

    def is_valid(self) -> bool:
        """
        Check structural well-formedness.

        A valid pattern is non-empty, has unique keys, and only
        non-negative integer column indices.
        """
        if not self.fields:
            return False

        keys = self.keys
        if len(set(keys)) != len(keys):
            return False

        for f in self.fields:
            if not f.key:
                return False
            if isinstance(f.index, bool) or not isinstance(f.index, int):
                return False
            if f.index < 0:
                return False

        return True

    def max_index(self) -> int:
        """Largest column index the pattern reads, or -1 when empty."""
        if not self.fields:
            return -1
        return max(f.index for f in self.fields)

    def extract(
        self, tokens: Sequence[str], into: Optional[dict[str, str]] = None
    ) -> dict[str, str]:
        """
        Copy each pattern column out of a tokenized line.

        Args:
            tokens: Tokens of one line; must have more than max_index() items
            into: Optional mapping to overwrite in place

        Returns:
            The filled mapping (``into`` when given)
        """
        data = {} if into is None else into
        for f in self.fields:
            data[f.key] = tokens[f.index]
        return data

    def info(self) -> str:
        """Diagnostic string of ordered key:column pairs."""
        return "[" + ", ".join(str(f) for f in self.fields) + "]"

    def __str__(self) -> str:
        return self.info()

    @classmethod
    def from_config(cls, config: Any) -> "Pattern":
        """
        Build a pattern from a configuration value.

        Accepts a list whose items are ``{"key": ..., "index": ...}``
        mappings, ``[key, index]`` pairs, or ``"key:index"`` strings.

        Raises:
            ConfigurationError: If the value or any item is malformed
        """
        if isinstance(config, (str, bytes)) or not isinstance(config, (list, tuple)):
            raise ConfigurationError(
                f"pattern must be a list of fields, got {type(config).__name__}"
            )

        fields = []
        for position, item in enumerate(config):
            fields.append(_field_from_config(item, position))

        return cls(fields)


def _field_from_config(item: Any, position: int) -> PatternField:
    """Parse one pattern field from its configuration form."""
    if isinstance(item, dict):
        if "key" not in item or "index" not in item:
            raise ConfigurationError(
                f"pattern field #{position} needs 'key' and 'index': {item!r}"
            )
        key, index = item["key"], item["index"]
    elif isinstance(item, str):
        key, sep, index = item.rpartition(":")
        if not sep:
            raise ConfigurationError(
                f"pattern field #{position} must look like 'key:index': {item!r}"
            )
    elif isinstance(item, (list, tuple)) and len(item) == 2:
        key, index = item
    else:
        raise ConfigurationError(f"pattern field #{position} is malformed: {item!r}")

    if isinstance(index, bool):
        raise ConfigurationError(f"pattern field #{position} has a boolean index")
    try:
        index = int(index)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"pattern field #{position} has a non-integer index: {index!r}"
        )

    return PatternField(key_name(key), index)


def patterns_from_config(config: Any) -> list[Pattern]:
    """Build a list of patterns from a list of pattern configurations."""
    if config is None:
        return []
    if not isinstance(config, (list, tuple)):
        raise ConfigurationError(
            f"patterns must be a list, got {type(config).__name__}"
        )
    return [Pattern.from_config(item) for item in config]
