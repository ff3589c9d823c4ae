"""
Equipment parsing and aggregation.

A vision model is asked to list the gym equipment in a photo. Its answer is
usually a plain or bulleted list but is sometimes a JSON array, so parsing
tries a strict JSON decode first and falls back to line extraction.

Per-photo results are then folded into one canonical, de-duplicated list and
merged into a location's stored equipment by set union.
"""

import json
import logging
import re
from typing import Any, Iterable, List

from backend.engine.parsing.models import StrictParseKind, StrictParseResult
from backend.engine.parsing.text import extract_lines

logger = logging.getLogger(__name__)

# ```json ... ``` wrapper some models put around structured answers
_CODE_FENCE_PATTERN = re.compile(r"^```[\w-]*\s*\n(.*?)\n?```$", re.DOTALL)


def _unwrap_code_fence(text: str) -> str:
    stripped = text.strip()
    match = _CODE_FENCE_PATTERN.match(stripped)
    if match:
        return match.group(1)
    return stripped


def strict_parse(text: str) -> StrictParseResult:
    """
    Try to decode a model response as a JSON literal.

    Args:
        text: Raw model output.

    Returns:
        SEQUENCE with the decoded items if the text is a JSON array,
        OTHER with the decoded value for any other JSON value,
        FAILED when the text is not JSON.
    """
    try:
        value = json.loads(_unwrap_code_fence(text))
    except (ValueError, TypeError, RecursionError) as e:
        return StrictParseResult.failed(str(e))

    if isinstance(value, list):
        return StrictParseResult.sequence(value)
    return StrictParseResult.other(value)


def parse_equipment(text: str) -> List[Any]:
    """
    Convert one model response into a list of equipment names.

    A JSON array is returned as-is. Anything else, including valid JSON that
    is not an array, goes through line extraction. Never raises; an empty
    list means no equipment was detected.

    Examples:
        >>> parse_equipment('["Treadmill", "Rowing Machine"]')
        ['Treadmill', 'Rowing Machine']
        >>> parse_equipment("- Treadmill\\n- Dumbbells\\n* Kettlebell")
        ['treadmill', 'dumbbells', 'kettlebell']
    """
    result = strict_parse(text)

    if result.kind == StrictParseKind.SEQUENCE:
        return result.items
    if result.kind == StrictParseKind.OTHER:
        logger.debug(
            f"Model returned non-array JSON ({type(result.value).__name__}), "
            "falling back to line extraction"
        )
        return extract_lines(text)
    if result.kind == StrictParseKind.FAILED:
        return extract_lines(text)
    return []


def canonicalize_equipment(name: str) -> str:
    """Trim and lower-case an equipment name for equality comparison."""
    return name.strip().lower()


def aggregate_equipment(responses: Iterable[str]) -> List[str]:
    """
    Fold per-photo model responses into one de-duplicated equipment list.

    Responses are parsed in order. Every string item that is non-empty after
    trimming is canonicalized and kept the first time it is seen, so the
    same piece of equipment seen in several photos appears once.

    Args:
        responses: One model response per photo.

    Returns:
        Canonical equipment names in first-seen order.
    """
    seen = set()
    detected: List[str] = []

    for response in responses:
        for item in parse_equipment(response):
            if not isinstance(item, str):
                logger.debug(f"Skipping non-text equipment item: {item!r}")
                continue
            name = canonicalize_equipment(item)
            if not name or name in seen:
                continue
            seen.add(name)
            detected.append(name)

    return detected


def merge_equipment(existing: Iterable[str], detected: Iterable[str]) -> List[str]:
    """
    Union newly detected equipment into previously stored equipment.

    Existing entries are never removed or reordered; new entries are
    appended once. Applying the same merge twice gives the same result.

    Args:
        existing: Equipment already stored for the location.
        detected: Equipment found by the latest scan.

    Returns:
        The merged equipment list.
    """
    merged: List[str] = []
    for name in list(existing or []) + list(detected):
        if name not in merged:
            merged.append(name)
    return merged
