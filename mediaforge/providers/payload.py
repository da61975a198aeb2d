"""
Structured-payload extraction from free-form model output.

Models asked for JSON often wrap it in prose or ``` fences. The extractor
looks for the first balanced bracket span that decodes as a JSON array:

    scan left to right for "["
    walk forward counting "[" / "]" depth, skipping anything inside
        double-quoted string literals (backslash escapes honoured)
    the span closes when depth returns to zero
    json-decode the span; if it is a list, return it, else keep scanning

iter_json_arrays() yields every decodable list instead, for callers that
validate the shape and want to fall through to a later candidate.

If no balanced span exists, or none of them decodes to a list, ParseError is
raised.
"""
import json
import logging
from typing import Any, Iterator, List, Tuple

from .exceptions import ParseError

logger = logging.getLogger(__name__)


def _balanced_spans(text: str) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of every balanced [...] span, in order of start."""
    start = text.find("[")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        end = None

        for pos in range(start, len(text)):
            char = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue

            if char == '"':
                in_string = True
            elif char == "[":
                depth += 1
            elif char == "]":
                depth -= 1
                if depth == 0:
                    end = pos + 1
                    break

        if end is None:
            # Unbalanced from here on; a later "[" can still close.
            start = text.find("[", start + 1)
            continue

        yield start, end
        start = text.find("[", start + 1)


def iter_json_arrays(text: str) -> Iterator[List[Any]]:
    """Yield every balanced span of text that decodes to a JSON list."""
    for start, end in _balanced_spans(text or ""):
        candidate = text[start:end]
        try:
            value = json.loads(candidate)
        except json.JSONDecodeError:
            logger.debug(f"Skipping non-JSON bracket span at {start}: {candidate[:60]!r}")
            continue
        if isinstance(value, list):
            yield value


def extract_json_array(text: str, provider: str = "payload") -> List[Any]:
    """Return the first JSON array embedded in text."""
    if not text:
        raise ParseError(provider, "Empty response, no JSON array to extract")

    for value in iter_json_arrays(text):
        return value

    if next(_balanced_spans(text), None) is None:
        raise ParseError(provider, "Could not extract JSON from response")
    raise ParseError(provider, "Response contains no well-formed JSON array")
