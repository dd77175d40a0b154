"""Text normalization applied to LLM output before JSON decoding."""

from __future__ import annotations

import re

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")


def strip_code_fence(text: str) -> str:
    """Remove a markdown code fence wrapping the whole payload.

    A leading triple backtick, optionally followed by a language tag such as
    ``json``, and a trailing triple backtick are both stripped. Text without a
    fence is returned trimmed but otherwise unchanged.
    """

    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]

    return cleaned.strip()
