# src/gno_converter/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from gno_converter.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based line number in the original text.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        pointer: Optional cross-reference identifier, e.g. "@I1@" or None.
        tag: GEDCOM tag, upper-cased, e.g. "INDI", "NAME", "CONC".
        value: The raw line value (payload) as a string (may be empty).
        raw: The original line content without trailing newline characters.
    """
    lineno: int
    level: int
    pointer: Optional[str]
    tag: str
    value: str
    raw: str


class GedcomSyntaxError(ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax."""


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def tokenize_line(line: str, lineno: int = 0) -> Token:
    """
    Parse a single GEDCOM line into a Token.

    Layout:
        <level> [<pointer>] <tag> [<value>]

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "2 DATE 1 JAN 1900"
    """
    raw = line.rstrip("\r\n")

    if raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff")

    # Some exporters indent nested lines; the level number is what counts.
    stripped = raw.lstrip()
    if not stripped.strip():
        raise GedcomSyntaxError(f"Empty or whitespace-only line at {lineno}")

    # --- 1. Extract level -------------------------------------------------
    parts = stripped.split(None, 1)
    if len(parts) == 1:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag (only level found) -> {raw!r}"
        )

    level_str, rest = parts
    if not level_str.isdigit():
        raise GedcomSyntaxError(
            f"Line {lineno}: level is not numeric -> {level_str!r} in {raw!r}"
        )
    level = int(level_str)

    # --- 2. Extract optional pointer -------------------------------------
    pointer: Optional[str] = None

    if rest.startswith("@"):
        ptr_parts = rest.split(None, 1)
        if len(ptr_parts) == 1:
            raise GedcomSyntaxError(
                f"Line {lineno}: pointer present but no tag -> {raw!r}"
            )
        pointer, rest = ptr_parts

    # --- 3. Extract tag and optional value --------------------------------
    if " " in rest:
        tag, value = rest.split(" ", 1)
    else:
        tag, value = rest, ""

    if not tag:
        raise GedcomSyntaxError(
            f"Line {lineno}: empty tag after level/pointer -> {raw!r}"
        )

    return Token(
        lineno=lineno,
        level=level,
        pointer=pointer,
        tag=tag.upper(),
        value=value,
        raw=raw,
    )


def tokenize_text(text: str, *, strict: bool = False) -> Iterator[Token]:
    """
    Yield Token objects for every non-empty GEDCOM line in ``text``.

    Windows and old-Mac line endings are normalized first and blank lines
    skipped. In lenient mode (the default) a malformed line is logged and
    dropped; with ``strict=True`` it raises GedcomSyntaxError.
    """
    for lineno, raw_line in enumerate(normalize_newlines(text).split("\n"), start=1):
        if not raw_line.strip():
            continue

        try:
            yield tokenize_line(raw_line, lineno=lineno)
        except GedcomSyntaxError as exc:
            if strict:
                raise
            log.debug("Skipping malformed GEDCOM line: %s", exc)
