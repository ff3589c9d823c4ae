"""
Line extraction for loosely formatted model output.

Turns a free-text answer ("- Treadmill\\n* Dumbbells") into cleaned,
lower-cased lines with list bullets removed.
"""

import re
from typing import Iterable, List, Optional

# Glyphs a model uses to start a list item
DEFAULT_BULLET_GLYPHS = ("-", "*", "•")

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


def _bullet_pattern(bullets: Iterable[str]) -> re.Pattern:
    glyphs = "".join(re.escape(glyph) for glyph in bullets)
    if not glyphs:
        return re.compile(r"^")
    return re.compile(rf"^[{glyphs}]?\s*")


_DEFAULT_BULLET_PATTERN = _bullet_pattern(DEFAULT_BULLET_GLYPHS)


def extract_lines(
    text: Optional[str],
    bullets: Iterable[str] = DEFAULT_BULLET_GLYPHS,
) -> List[str]:
    """
    Split text into cleaned, lower-cased lines.

    Each line is trimmed, empty lines are dropped, a single leading bullet
    glyph (plus the whitespace after it) is removed, and the result is
    lower-cased. Never raises.

    Args:
        text: Raw model output.
        bullets: Glyphs treated as list bullets.

    Returns:
        Lines in their original order; empty list for empty input.

    Examples:
        >>> extract_lines("- Treadmill\\n- Dumbbells\\n* Kettlebell")
        ['treadmill', 'dumbbells', 'kettlebell']
    """
    if not text:
        return []

    if tuple(bullets) == DEFAULT_BULLET_GLYPHS:
        pattern = _DEFAULT_BULLET_PATTERN
    else:
        pattern = _bullet_pattern(bullets)

    lines = []
    for raw_line in _LINE_BREAK_PATTERN.split(text):
        line = raw_line.strip()
        if not line:
            continue
        lines.append(pattern.sub("", line, count=1).lower())
    return lines
