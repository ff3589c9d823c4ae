"""
Data models for model-response parsing.

Contains the tagged result of the strict JSON attempt used by the equipment
parser, the section states of the routine parser, and the RoutineRecord it
produces.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class StrictParseKind(str, Enum):
    """Outcome of decoding a model response as a JSON literal."""

    SEQUENCE = "sequence"  # Decoded to a JSON array
    OTHER = "other"  # Decoded, but not to an array
    FAILED = "failed"  # Not valid JSON


@dataclass(frozen=True)
class StrictParseResult:
    """
    Tagged variant returned by ``strict_parse``.

    Only the payload matching ``kind`` is populated:
    - SEQUENCE: ``items``
    - OTHER: ``value``
    - FAILED: ``error``
    """

    kind: StrictParseKind
    items: List[Any] = field(default_factory=list)
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def sequence(cls, items: List[Any]) -> "StrictParseResult":
        return cls(kind=StrictParseKind.SEQUENCE, items=list(items))

    @classmethod
    def other(cls, value: Any) -> "StrictParseResult":
        return cls(kind=StrictParseKind.OTHER, value=value)

    @classmethod
    def failed(cls, error: str) -> "StrictParseResult":
        return cls(kind=StrictParseKind.FAILED, error=error)


class RoutineSection(str, Enum):
    """Section of the routine document the parser is currently reading."""

    NONE = "none"
    TITLE = "title"
    DESCRIPTION = "description"
    OUTLINE = "outline"


@dataclass
class RoutineRecord:
    """
    A validated workout routine.

    All three fields are non-empty after trimming; ``outline`` is markdown
    with no run of three or more newlines.

    Example:
        >>> RoutineRecord(
        ...     title="Strength Plan",
        ...     description="Builds muscle.",
        ...     outline="## Day 1\\n\\nSquat: 5x5",
        ... )
    """

    title: str
    description: str
    outline: str

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "outline": self.outline,
        }
