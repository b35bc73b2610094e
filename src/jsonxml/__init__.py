"""
Single-pass JSON to XML translator.

Validates JSON syntax with a hand-written recursive descent parser and emits
XML markup directly while parsing, without building an intermediate tree.
Failures are collected as position-tagged error records instead of aborting
the caller.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import IO
from typing import Any
from typing import TypeAlias
from xml.sax.saxutils import escape

from jsonxml import _profile
from jsonxml._profile import HotPathStats
from jsonxml._profile import clear_hot_path_stats
from jsonxml._profile import get_hot_path_stats
from jsonxml._source_map import SourceMap

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

Position: TypeAlias = int

DEFAULT_MAX_DEPTH = 256

END_SENTINEL = "\0"
NUMBER_START = "-0123456789"
NUMBER_CHARS = "0123456789."
LITERALS = ("true", "false", "null")


class ErrorKind(Enum):
    """
    Failure categories reported by the translator.

    The value of each member is its human-readable message.
    """

    INVALID_ELEMENT = "Invalid element."
    EXPECTED_COLON = "Expected ':' after object key."
    EXPECTED_CLOSE_BRACE = "Expected '}' at end of object."
    EXPECTED_CLOSE_BRACKET = "Expected ']' at end of array."
    UNTERMINATED_STRING = "Unterminated string."
    INVALID_LITERAL = "Invalid literal."
    TRAILING_CONTENT = "Unexpected content at end of input."
    UNEXPECTED_END_OF_INPUT = "Unexpected end of input."
    EXPECTED_KEY = "Expected string key in object."
    DEPTH_LIMIT_EXCEEDED = "Maximum nesting depth exceeded."


class TranslationError(ValueError):
    """
    Describes a translation failure with the buffer offset where it happened.

    Instances are collected in ``Translation.errors`` and only raised when a
    caller asks for it through ``Translation.raise_for_errors``.
    """

    def __init__(self, kind: ErrorKind, pos: Position = 0) -> None:
        if not isinstance(kind, ErrorKind):
            raise TypeError("kind must be an ErrorKind")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.kind = kind
        self.msg = kind.value
        self.pos = pos

        super().__init__(f"Error at position {pos}: {self.msg}")


@dataclass(frozen=True)
class Ok:
    """Successful production carrying the emitted fragment."""

    fragment: str


@dataclass(frozen=True)
class Err:
    """
    Failed production.

    ``partial`` holds whatever markup the enclosing productions had emitted
    before the failure.
    """

    kind: ErrorKind
    pos: Position
    partial: str = ""

    def after(self, emitted: list[str]) -> "Err":
        """Returns this failure with ``emitted`` prepended to the partial XML."""
        return Err(self.kind, self.pos, "".join(emitted) + self.partial)


ParseResult: TypeAlias = Ok | Err


@dataclass(frozen=True)
class TranslateConfig:
    """
    Configures translation behavior with immutable settings.

    ``escape_text`` escapes ``<``, ``>`` and ``&`` in string content; the
    default leaves content untouched. ``max_depth`` bounds object and array
    nesting, ``None`` disables the bound.
    """

    escape_text: bool = False
    max_depth: int | None = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.escape_text, bool):
            raise TypeError("escape_text must be a boolean")
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(
                self.max_depth, int
            ):
                raise TypeError("max_depth must be an integer or None")
            if self.max_depth < 0:
                raise ValueError("max_depth must be non-negative")


@dataclass
class Translation:
    """
    Outcome of one translation run.

    ``xml`` may be incomplete when ``errors`` is not empty and must not be
    used as output in that case.
    """

    xml: str
    errors: list[TranslationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def error_messages(self) -> list[str]:
        """Returns errors formatted as ``Error at position <n>: <message>``."""
        return [str(error) for error in self.errors]

    def raise_for_errors(self) -> None:
        """Raises the first collected error, if any."""
        if self.errors:
            raise self.errors[0]


class Cursor:
    """
    Read offset into the flattened input buffer.

    Owned by a single translation and passed to every production.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def at_end(self) -> bool:
        return self.pos >= self.length

    def peek(self) -> str:
        """Returns current character without advancing."""
        return (
            self.text[self.pos] if self.pos < self.length else END_SENTINEL
        )

    def skip_whitespace(self) -> None:
        """Skips any characters classified as whitespace."""
        with _profile.ProfileContext("skip_whitespace", self):
            while self.pos < self.length and self.text[self.pos].isspace():
                self.pos += 1

    def match(self, literal: str) -> bool:
        """Consumes ``literal`` if the buffer continues with it."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False


def _depth_exceeded(config: TranslateConfig, depth: int) -> bool:
    return config.max_depth is not None and depth > config.max_depth


def _parse_element(
    cursor: Cursor, config: TranslateConfig, depth: int = 0
) -> ParseResult:
    """
    Dispatches on the lookahead character to the matching production.

    End of buffer is checked before the lookahead is inspected.
    """
    cursor.skip_whitespace()
    if cursor.at_end():
        return Err(ErrorKind.INVALID_ELEMENT, cursor.pos)

    char = cursor.peek()
    if char == "{":
        return _parse_object(cursor, config, depth + 1)
    elif char == "[":
        return _parse_array(cursor, config, depth + 1)
    elif char == '"':
        result = _parse_string(cursor)
        if isinstance(result, Err):
            return result.after(["<string>"])
        return Ok(f"<string>{_text(result.fragment, config)}</string>")
    elif char in "tfn":
        result = _parse_literal(cursor)
        if isinstance(result, Err):
            return result
        if result.fragment == "null":
            return Ok("<null/>")
        return Ok(f"<boolean>{result.fragment}</boolean>")
    elif char in NUMBER_START:
        result = _parse_number(cursor)
        if isinstance(result, Err):
            return result.after(["<number>"])
        return Ok(f"<number>{result.fragment}</number>")
    else:
        return Err(ErrorKind.INVALID_ELEMENT, cursor.pos)


def _parse_object(
    cursor: Cursor, config: TranslateConfig, depth: int
) -> ParseResult:
    """
    Parses ``{ "key": element, ... }`` into ``<object><key>...</key></object>``.

    Keys are used verbatim as tag names. A comma always requires another
    member, so trailing commas are rejected.
    """
    with _profile.ProfileContext("parse_object", cursor):
        if _depth_exceeded(config, depth):
            return Err(ErrorKind.DEPTH_LIMIT_EXCEEDED, cursor.pos)
        cursor.match("{")

        emitted = ["<object>"]
        cursor.skip_whitespace()
        if cursor.match("}"):
            return Ok("<object></object>")

        while True:
            cursor.skip_whitespace()
            key = _parse_string(cursor)
            if isinstance(key, Err):
                return key.after(emitted)

            cursor.skip_whitespace()
            if not cursor.match(":"):
                return Err(ErrorKind.EXPECTED_COLON, cursor.pos).after(emitted)

            emitted.append(f"<{key.fragment}>")
            value = _parse_element(cursor, config, depth)
            if isinstance(value, Err):
                return value.after(emitted)
            emitted.append(value.fragment)
            emitted.append(f"</{key.fragment}>")

            cursor.skip_whitespace()
            if not cursor.match(","):
                break

        if not cursor.match("}"):
            return Err(ErrorKind.EXPECTED_CLOSE_BRACE, cursor.pos).after(
                emitted
            )

        emitted.append("</object>")
        return Ok("".join(emitted))


def _parse_array(
    cursor: Cursor, config: TranslateConfig, depth: int
) -> ParseResult:
    """Parses ``[ element, ... ]`` into ``<array>...</array>``."""
    with _profile.ProfileContext("parse_array", cursor):
        if _depth_exceeded(config, depth):
            return Err(ErrorKind.DEPTH_LIMIT_EXCEEDED, cursor.pos)
        cursor.match("[")

        emitted = ["<array>"]
        cursor.skip_whitespace()
        if cursor.match("]"):
            return Ok("<array></array>")

        while True:
            item = _parse_element(cursor, config, depth)
            if isinstance(item, Err):
                return item.after(emitted)
            emitted.append(item.fragment)

            cursor.skip_whitespace()
            if not cursor.match(","):
                break

        if not cursor.match("]"):
            return Err(ErrorKind.EXPECTED_CLOSE_BRACKET, cursor.pos).after(
                emitted
            )

        emitted.append("</array>")
        return Ok("".join(emitted))


def _parse_string(cursor: Cursor) -> ParseResult:
    """
    Scans a string up to the next double quote and returns its raw content.

    Escape sequences are not interpreted, so ``\\"`` ends the string.
    """
    with _profile.ProfileContext("parse_string", cursor):
        if cursor.at_end():
            return Err(ErrorKind.UNEXPECTED_END_OF_INPUT, cursor.pos)
        if cursor.peek() != '"':
            return Err(ErrorKind.EXPECTED_KEY, cursor.pos)

        start = cursor.pos + 1
        end = cursor.text.find('"', start)
        if end == -1:
            cursor.pos = cursor.length
            return Err(ErrorKind.UNTERMINATED_STRING, cursor.pos)

        cursor.pos = end + 1
        return Ok(cursor.text[start:end])


def _parse_literal(cursor: Cursor) -> ParseResult:
    """Matches ``true``, ``false`` or ``null`` at the cursor."""
    with _profile.ProfileContext("parse_literal", cursor):
        for literal in LITERALS:
            if cursor.match(literal):
                return Ok(literal)
        return Err(ErrorKind.INVALID_LITERAL, cursor.pos)


def _parse_number(cursor: Cursor) -> ParseResult:
    """
    Scans an optional ``-`` followed by a run of ASCII digits and dots.

    Digit and dot placement is not validated; the text is emitted as is.
    """
    with _profile.ProfileContext("parse_number", cursor):
        start = cursor.pos
        if cursor.match("-") and cursor.at_end():
            return Err(ErrorKind.UNEXPECTED_END_OF_INPUT, cursor.pos)

        while not cursor.at_end() and cursor.peek() in NUMBER_CHARS:
            cursor.pos += 1
        return Ok(cursor.text[start : cursor.pos])


def _text(content: str, config: TranslateConfig) -> str:
    return escape(content) if config.escape_text else content


def _translate_buffer(text: str, config: TranslateConfig) -> Translation:
    """
    Translates one flattened buffer.

    The element must be followed only by whitespace. A failure anywhere
    below becomes the single entry of the error list. Nesting that outruns
    the interpreter stack before ``max_depth`` is reached is reported as
    exceeding the depth limit.
    """
    cursor = Cursor(text)
    with _profile.ProfileContext("translate", cursor):
        try:
            result = _parse_element(cursor, config)
        except RecursionError:
            result = Err(ErrorKind.DEPTH_LIMIT_EXCEEDED, cursor.pos)

        if isinstance(result, Ok):
            cursor.skip_whitespace()
            if not cursor.at_end():
                result = Err(
                    ErrorKind.TRAILING_CONTENT, cursor.pos, result.fragment
                )

        if isinstance(result, Err):
            logger.debug(
                "Translation failed with %s at position %d",
                result.kind.name,
                result.pos,
            )
            return Translation(
                result.partial, [TranslationError(result.kind, result.pos)]
            )

        return Translation(result.fragment)


def join_lines(lines: Iterable[str]) -> str:
    """
    Flattens input lines into one buffer.

    Each line is stripped and the results are concatenated without a
    separator, so tokens split only by a line break end up adjacent.
    """
    return "".join(line.strip() for line in lines)


def translate(s: str, **kwargs: Any) -> Translation:
    """
    Translates a flattened JSON buffer into XML.

    Keyword arguments are passed to ``TranslateConfig``.
    """
    if not isinstance(s, str):
        raise TypeError(f"the JSON text must be str, not {type(s).__name__}")

    config = TranslateConfig(**kwargs)
    logger.debug("Translating buffer of %d characters", len(s))
    return _translate_buffer(s, config)


def translate_lines(lines: Iterable[str], **kwargs: Any) -> Translation:
    """Flattens ``lines`` and translates the result."""
    return translate(join_lines(lines), **kwargs)


def load(fp: IO[str], **kwargs: Any) -> Translation:
    """
    Translates JSON read line by line from a text file object.
    """
    if not hasattr(fp, "readlines"):
        raise TypeError("fp must have a readlines() method")

    return translate_lines(fp.readlines(), **kwargs)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "Cursor",
    "Err",
    "ErrorKind",
    "HotPathStats",
    "Ok",
    "ParseResult",
    "SourceMap",
    "TranslateConfig",
    "Translation",
    "TranslationError",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "join_lines",
    "load",
    "translate",
    "translate_lines",
]
