"""
Pytest configuration and shared fixtures for jsonxml tests.

Provides immutable translation cases: documents that must translate with
their expected XML, and documents that must fail with their expected error
kind and position.
"""

import re
from dataclasses import dataclass

import pytest

from jsonxml import ErrorKind

_TAG_RE = re.compile(r"<(/?)([^<>/]+)(/?)>")


@dataclass(frozen=True)
class XmlTestCase:
    """
    Immutable container for translation test case data.

    Passing cases set ``expected_xml``; failing cases set ``error_kind`` and
    ``error_pos``.
    """

    description: str
    input_data: str
    expected_xml: str = ""
    error_kind: ErrorKind | None = None
    error_pos: int = 0


def assert_balanced(xml: str) -> None:
    """Asserts that every opened tag is closed in order."""
    stack: list[str] = []
    for match in _TAG_RE.finditer(xml):
        closing, name, self_closing = match.groups()
        if self_closing:
            continue
        if closing:
            assert stack, f"unexpected </{name}>"
            assert stack.pop() == name
        else:
            stack.append(name)
    assert not stack, f"unclosed tags: {stack}"


@pytest.fixture
def xml_pass_cases() -> list[XmlTestCase]:
    """
    Provides documents that must translate without errors.
    """
    return [
        XmlTestCase(
            "mixed object",
            '{"a":1,"b":[true,false,null]}',
            "<object><a><number>1</number></a><b><array>"
            "<boolean>true</boolean><boolean>false</boolean><null/>"
            "</array></b></object>",
        ),
        XmlTestCase("bare string", '"hello"', "<string>hello</string>"),
        XmlTestCase("empty string", '""', "<string></string>"),
        XmlTestCase("empty array", "[]", "<array></array>"),
        XmlTestCase("empty object", "{}", "<object></object>"),
        XmlTestCase("spaced empty array", "[ ]", "<array></array>"),
        XmlTestCase("spaced empty object", "{ }", "<object></object>"),
        XmlTestCase("null", "null", "<null/>"),
        XmlTestCase("true", "true", "<boolean>true</boolean>"),
        XmlTestCase("false", "false", "<boolean>false</boolean>"),
        XmlTestCase("integer", "42", "<number>42</number>"),
        XmlTestCase("negative float", "-12.5", "<number>-12.5</number>"),
        XmlTestCase("unvalidated dots", "1.2.3", "<number>1.2.3</number>"),
        XmlTestCase(
            "nested containers",
            '{"x":{"y":[1,{"z":""}]}}',
            "<object><x><object><y><array><number>1</number>"
            "<object><z><string></string></z></object></array></y>"
            "</object></x></object>",
        ),
        XmlTestCase(
            "surrounding whitespace",
            ' { "a" : [ 1 , 2 ] } ',
            "<object><a><array><number>1</number><number>2</number>"
            "</array></a></object>",
        ),
        XmlTestCase(
            "key used verbatim",
            '{"my key":1}',
            "<object><my key><number>1</number></my key></object>",
        ),
        XmlTestCase(
            "array of arrays",
            "[[],[[]]]",
            "<array><array></array><array><array></array></array></array>",
        ),
    ]


@pytest.fixture
def xml_fail_cases() -> list[XmlTestCase]:
    """
    Provides documents that must fail with a known error kind and position.
    """
    return [
        XmlTestCase(
            "trailing comma in array",
            "[1,2,]",
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=5,
        ),
        XmlTestCase(
            "missing closing brace",
            '{"k": "v"',
            error_kind=ErrorKind.EXPECTED_CLOSE_BRACE,
            error_pos=9,
        ),
        XmlTestCase(
            "empty document",
            "",
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=0,
        ),
        XmlTestCase(
            "whitespace only",
            "   ",
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=3,
        ),
        XmlTestCase(
            "missing colon",
            '{"a" 1}',
            error_kind=ErrorKind.EXPECTED_COLON,
            error_pos=5,
        ),
        XmlTestCase(
            "missing comma in array",
            "[1 2]",
            error_kind=ErrorKind.EXPECTED_CLOSE_BRACKET,
            error_pos=3,
        ),
        XmlTestCase(
            "unclosed array",
            "[1,2",
            error_kind=ErrorKind.EXPECTED_CLOSE_BRACKET,
            error_pos=4,
        ),
        XmlTestCase(
            "unterminated string",
            '["abc',
            error_kind=ErrorKind.UNTERMINATED_STRING,
            error_pos=5,
        ),
        XmlTestCase(
            "unterminated key",
            '{"a:1}',
            error_kind=ErrorKind.UNTERMINATED_STRING,
            error_pos=6,
        ),
        XmlTestCase(
            "truncated literal",
            "tru",
            error_kind=ErrorKind.INVALID_LITERAL,
            error_pos=0,
        ),
        XmlTestCase(
            "misspelled null",
            "[nul]",
            error_kind=ErrorKind.INVALID_LITERAL,
            error_pos=1,
        ),
        XmlTestCase(
            "extra value after root",
            '{"a":1} x',
            error_kind=ErrorKind.TRAILING_CONTENT,
            error_pos=8,
        ),
        XmlTestCase(
            "literal without word boundary",
            "truee",
            error_kind=ErrorKind.TRAILING_CONTENT,
            error_pos=4,
        ),
        XmlTestCase(
            "escaped quote ends string",
            '"a\\"b"',
            error_kind=ErrorKind.TRAILING_CONTENT,
            error_pos=4,
        ),
        XmlTestCase(
            "trailing comma in object",
            '{"a":1,}',
            error_kind=ErrorKind.EXPECTED_KEY,
            error_pos=7,
        ),
        XmlTestCase(
            "unquoted key",
            "{a:1}",
            error_kind=ErrorKind.EXPECTED_KEY,
            error_pos=1,
        ),
        XmlTestCase(
            "object cut after comma",
            '{"a":1,',
            error_kind=ErrorKind.UNEXPECTED_END_OF_INPUT,
            error_pos=7,
        ),
        XmlTestCase(
            "bare minus",
            "-",
            error_kind=ErrorKind.UNEXPECTED_END_OF_INPUT,
            error_pos=1,
        ),
        XmlTestCase(
            "unknown character",
            "@",
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=0,
        ),
        XmlTestCase(
            "double comma",
            "[1,,2]",
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=3,
        ),
        XmlTestCase(
            "missing member value",
            '{"a":}',
            error_kind=ErrorKind.INVALID_ELEMENT,
            error_pos=5,
        ),
        XmlTestCase(
            "key at end of input",
            '{"a"',
            error_kind=ErrorKind.EXPECTED_COLON,
            error_pos=4,
        ),
    ]
