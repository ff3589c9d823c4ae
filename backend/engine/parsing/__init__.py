"""
Model-response parsing for LiftLens.

This module turns loosely structured LLM output into typed results:
1. Equipment parsing - a strict JSON attempt with line-extraction fallback,
   folded across photos into one canonical equipment list
2. Routine parsing - a section-aware reader producing title, description
   and a normalized markdown outline

All functions here are pure; model calls and persistence live in services.
"""

from backend.engine.parsing.models import (
    RoutineRecord,
    RoutineSection,
    StrictParseKind,
    StrictParseResult,
)
from backend.engine.parsing.text import DEFAULT_BULLET_GLYPHS, extract_lines
from backend.engine.parsing.equipment import (
    aggregate_equipment,
    canonicalize_equipment,
    merge_equipment,
    parse_equipment,
    strict_parse,
)
from backend.engine.parsing.routine import RoutineParser, normalize_outline, parse_routine

__all__ = [
    # Core models
    "RoutineRecord",
    "RoutineSection",
    "StrictParseKind",
    "StrictParseResult",
    # Text extraction
    "DEFAULT_BULLET_GLYPHS",
    "extract_lines",
    # Equipment
    "strict_parse",
    "parse_equipment",
    "canonicalize_equipment",
    "aggregate_equipment",
    "merge_equipment",
    # Routines
    "RoutineParser",
    "parse_routine",
    "normalize_outline",
]
