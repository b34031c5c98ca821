# =============================================================================
# core/validation.py  -  The Spec Validator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Converts the untyped reply from the generation backend into ONE typed
#   GeneratedTool.  Nothing downstream ever reads the raw reply again.
#
# TWO-TIER POLICY (applied in order):
#
#   HARD FAIL - the pipeline aborts, execution is never attempted:
#     1. toolName or executeCode is empty/absent   → MissingFieldError
#     2. executeCode lacks the entry point         → CodeFormatError
#
#   SOFT DEFAULT - never aborts:
#     3. inputSchema / outputSchema not a mapping  → {}
#     4. input not a mapping                       → {}
#        reasoning / toolDescription missing       → ""
#
#   A malformed code body makes execution impossible.  A missing schema only
#   weakens documentation.
#
# NOT VALIDATED: whether `input` satisfies `inputSchema`.  Mismatches surface
# as whatever the execution capability reports.
# =============================================================================

import re
from typing import Any, Mapping

from core.errors import CodeFormatError, MissingFieldError
from core.models import GeneratedTool, ToolDescriptor


# `export default async function [name](` - the parameter list is checked separately.
_IDENT = r"[A-Za-z_$][\w$]*"
ENTRY_POINT_PATTERN = re.compile(
    rf"export\s+default\s+async\s+function\s*(?:{_IDENT})?\s*\("
)
# After `)`: an optional return type annotation, then the body.
_BODY_START = re.compile(r"\s*(?::[^{;]*)?\{")

_CLOSERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
_QUOTES = "'\"`"


def split_parameters(code: str, start: int) -> tuple[list[str], int] | None:
    """Split the parameter list that begins at `code[start]` (just past "(").

    Only top-level commas separate parameters, so destructuring, defaults and
    type annotations count as one parameter each.  Returns the stripped
    parameters and the index just past the closing ")", or None when the
    list never closes.
    """
    stack: list[str] = []
    params: list[str] = []
    current: list[str] = []
    quote = None
    i = start
    while i < len(code):
        ch = code[i]
        if quote:
            current.append(ch)
            if ch == "\\" and i + 1 < len(code):
                i += 1
                current.append(code[i])
            elif ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
            current.append(ch)
        elif not stack and ch == ")":
            params.append("".join(current).strip())
            if params and params[-1] == "" and len(params) > 1:
                params.pop()  # trailing comma
            return params, i + 1
        elif not stack and ch == ",":
            params.append("".join(current).strip())
            current = []
        else:
            if ch in _CLOSERS:
                stack.append(_CLOSERS[ch])
            elif stack and ch == stack[-1]:
                stack.pop()
            current.append(ch)
        i += 1
    return None


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _as_mapping(value: Any) -> dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    return {}


def has_entry_point(code: str) -> bool:
    """True if `code` declares a default-exported async function of exactly two parameters."""
    for match in ENTRY_POINT_PATTERN.finditer(code):
        split = split_parameters(code, match.end())
        if split is None:
            continue
        params, end = split
        if len(params) == 2 and all(params) and _BODY_START.match(code, end):
            return True
    return False


def validate_reply(raw: Any) -> GeneratedTool:
    """Validate one generation reply.

    Args:
        raw: Whatever the generation client returned.  Anything that is not
            a mapping is treated as an empty reply.

    Returns:
        A GeneratedTool whose descriptor.code is byte-identical to the
        reply's executeCode.

    Raises:
        MissingFieldError: toolName or executeCode is missing or blank.
        CodeFormatError: executeCode does not declare the required entry point.
    """
    reply = _as_mapping(raw)

    name = _as_str(reply.get("toolName"))
    code = _as_str(reply.get("executeCode"))
    if not name.strip() or not code.strip():
        raise MissingFieldError()

    if not has_entry_point(code):
        raise CodeFormatError()

    descriptor = ToolDescriptor(
        name=name,
        description=_as_str(reply.get("toolDescription")),
        code=code,
        input_schema=_as_mapping(reply.get("inputSchema")),
        output_schema=_as_mapping(reply.get("outputSchema")),
    )
    return GeneratedTool(
        descriptor=descriptor,
        generated_input=_as_mapping(reply.get("input")),
        reasoning=_as_str(reply.get("reasoning")),
    )
