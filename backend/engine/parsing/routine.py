"""
Workout routine parsing.

The routine model is asked for a document with a title, a description and a
markdown outline. Depending on the prompt style it marks them with a level-1
header or explicit ``TITLE:`` / ``DESCRIPTION:`` / ``OUTLINE:`` cues, and it
does not always follow either style exactly. RoutineParser reads the text
line by line, accumulates each section, and rejects results that are missing
any of the three parts.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from backend.engine.parsing.models import RoutineRecord, RoutineSection
from backend.errors import UpstreamContentInvalidError

logger = logging.getLogger(__name__)

HEADER_TITLE_PREFIX = "# "
TITLE_MARKER = "TITLE:"
DESCRIPTION_MARKER = "DESCRIPTION:"
OUTLINE_MARKER = "OUTLINE:"

_EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")


def normalize_outline(outline: str) -> str:
    """
    Collapse runs of blank lines in a markdown outline and trim it.

    Any run of three or more newlines becomes exactly two.

    Examples:
        >>> normalize_outline("## Day 1\\n\\n\\n\\nSquat: 5x5\\n")
        '## Day 1\\n\\nSquat: 5x5'
    """
    return _EXCESS_NEWLINES_PATTERN.sub("\n\n", outline).strip()


def _find_header_title(text: str) -> Optional[str]:
    """Return the remainder of the first level-1 header line, if any."""
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(HEADER_TITLE_PREFIX):
            title = line[len(HEADER_TITLE_PREFIX):].strip()
            if title:
                return title
    return None


@dataclass
class _ParseState:
    """Sections accumulated during a single parse."""

    section: RoutineSection = RoutineSection.NONE
    title: str = ""
    description: str = ""
    outline: str = ""


class RoutineParser:
    """
    Section-aware parser for generated workout routines.

    Reads the response one trimmed line at a time:
    - ``# `` or ``TITLE:`` starts the title (the later one wins)
    - ``DESCRIPTION:`` starts the description, seeded with the rest of the line
    - ``OUTLINE:`` starts the outline
    - other lines are appended to the current section; description lines are
      joined by spaces and headers dropped, outline lines keep their line
      breaks and headers get a blank line after them

    Each call to ``parse`` keeps its sections in a fresh ``_ParseState``, so
    one parser may be shared between requests.

    Example:
        >>> parser = RoutineParser()
        >>> record = parser.parse(
        ...     "# Strength Plan\\nDESCRIPTION: Builds muscle.\\n"
        ...     "OUTLINE:\\n## Day 1\\nSquat: 5x5"
        ... )
        >>> record.outline
        '## Day 1\\n\\nSquat: 5x5'
    """

    def parse(self, text: str) -> RoutineRecord:
        """
        Parse a model response into a RoutineRecord.

        Args:
            text: Raw model output.

        Returns:
            RoutineRecord with trimmed title and description and a
            normalized outline.

        Raises:
            UpstreamContentInvalidError: If the title, description or
                outline is empty.
        """
        text = text or ""
        state = _ParseState()

        for raw_line in text.splitlines():
            self._consume(state, raw_line.strip())

        title = state.title.strip()
        if not title:
            title = (_find_header_title(text) or "").strip()

        record = RoutineRecord(
            title=title,
            description=state.description.strip(),
            outline=normalize_outline(state.outline),
        )
        self._validate(record)
        return record

    @staticmethod
    def _consume(state: _ParseState, line: str) -> None:
        if not line:
            return

        if line.startswith(HEADER_TITLE_PREFIX):
            state.section = RoutineSection.TITLE
            state.title = line[len(HEADER_TITLE_PREFIX):].strip()
        elif line.startswith(TITLE_MARKER):
            state.section = RoutineSection.TITLE
            state.title = line[len(TITLE_MARKER):].strip()
        elif line.startswith(DESCRIPTION_MARKER):
            state.section = RoutineSection.DESCRIPTION
            state.description = line[len(DESCRIPTION_MARKER):].strip()
        elif line.startswith(OUTLINE_MARKER):
            state.section = RoutineSection.OUTLINE
        elif state.section == RoutineSection.DESCRIPTION:
            # Markdown headers leaking into the description are noise
            if not line.startswith("#"):
                state.description += " " + line
        elif state.section == RoutineSection.OUTLINE:
            state.outline += line + "\n"
            if line.startswith("#"):
                state.outline += "\n"

    @staticmethod
    def _validate(record: RoutineRecord) -> None:
        missing: List[str] = [
            name
            for name in ("title", "description", "outline")
            if not getattr(record, name)
        ]
        if missing:
            logger.warning(f"Generated routine failed validation, missing: {missing}")
            raise UpstreamContentInvalidError(missing)


def parse_routine(text: str) -> RoutineRecord:
    """Parse a model response with a fresh RoutineParser."""
    return RoutineParser().parse(text)
