"""
Input sanitization for user-provided text.

Fitness goals and equipment names are echoed into model prompts and back to
clients, so markup and script-like content is stripped on the way in.
"""
import re
from typing import Annotated

from pydantic import AfterValidator

_TAG_PATTERN = re.compile(r"<[^>]*>")
_SCRIPT_URI_PATTERN = re.compile(r"(?i)(javascript|data|vbscript):")
_EVENT_HANDLER_PATTERN = re.compile(r"(?i)on\w+\s*=")


def sanitize_text_input(value: str) -> str:
    """
    Remove HTML tags, script URIs and inline event handlers from text.

    Examples:
        >>> sanitize_text_input("Build <b>strength</b>")
        'Build strength'
        >>> sanitize_text_input("javascript:alert(1)")
        'alert(1)'
    """
    if not value:
        return value

    value = _TAG_PATTERN.sub("", value)
    value = _SCRIPT_URI_PATTERN.sub("", value)
    value = _EVENT_HANDLER_PATTERN.sub("", value)
    return value.strip()


# Usage: field_name: SanitizedStr = Field(...)
SanitizedStr = Annotated[str, AfterValidator(sanitize_text_input)]
