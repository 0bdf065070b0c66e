"""
Nested lookups over parsed inspect documents.

Runtimes use both a missing key and an explicit ``null`` to say "not
applicable", so every lookup collapses the two into a single ``absent``
state and keeps structural problems (wrong types) apart as ``malformed``.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type, Union

logger = logging.getLogger(__name__)

PRESENT = "present"
ABSENT = "absent"
MALFORMED = "malformed"


class MalformedDocument(ValueError):
    """A required field is missing or a field has the wrong type."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}" if path else reason)
        logger.warning(f"Malformed inspect document at '{path or '<root>'}': {reason}")


@dataclass(frozen=True)
class Lookup:
    state: str
    path: str
    value: Any = None
    reason: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.state == PRESENT

    @property
    def absent(self) -> bool:
        return self.state == ABSENT

    def required(self) -> Any:
        """Return the value, raising MalformedDocument unless present."""
        if self.state == PRESENT:
            return self.value
        if self.state == ABSENT:
            raise MalformedDocument(self.path, "required field is missing")
        raise MalformedDocument(self.path, self.reason)

    def optional(self, default: Any = None) -> Any:
        """Return the value, or default when absent. Malformed still raises."""
        if self.state == PRESENT:
            return self.value
        if self.state == ABSENT:
            return default
        raise MalformedDocument(self.path, self.reason)


def _type_name(expect) -> str:
    if isinstance(expect, tuple):
        return " or ".join(t.__name__ for t in expect)
    return expect.__name__


def _matches(value: Any, expect) -> bool:
    types = expect if isinstance(expect, tuple) else (expect,)
    # bool is an int subclass, JSON keeps them apart
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def lookup(document: Any, *path: str, expect: Union[Type, Tuple[Type, ...]] = object) -> Lookup:
    """
    Walk ``path`` through nested JSON objects.

    Returns a Lookup that is present (all keys found, non-null, final value of
    type ``expect``), absent (a key is missing or null) or malformed (an
    intermediate value is not an object, or the final value has another type).
    """
    current = document
    walked = []
    for key in path:
        if not isinstance(current, dict):
            where = ".".join(walked) or "<root>"
            return Lookup(MALFORMED, ".".join(walked + [key]),
                          reason=f"expected an object at '{where}', got {type(current).__name__}")
        walked.append(key)
        current = current.get(key)
        if current is None:
            return Lookup(ABSENT, ".".join(walked))

    dotted = ".".join(walked)
    if not _matches(current, expect):
        return Lookup(MALFORMED, dotted,
                      reason=f"expected {_type_name(expect)}, got {type(current).__name__}")
    return Lookup(PRESENT, dotted, value=current)
