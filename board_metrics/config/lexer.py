"""
Lexer (tokenizer) for the nginx-like configuration syntax.

Supports:
- Identifiers (block types, directive names, bare words)
- Quoted strings (single or double quotes with escape sequences)
- Numbers and durations (10s, 5m, 1h, 250ms)
- Booleans (on, off, true, false)
- Braces and semicolons
- Single-line (#) and multi-line (/* */) comments
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types for the configuration syntax."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    DURATION = auto()
    BOOLEAN = auto()
    LBRACE = auto()
    RBRACE = auto()
    SEMICOLON = auto()
    EOF = auto()


@dataclass
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str | int | float | bool
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class LexerError(Exception):
    """Exception raised for lexer errors."""

    def __init__(self, message: str, line: int, column: int):
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, column {column}: {message}")


BOOLEAN_KEYWORDS = {"on": True, "off": False, "true": True, "false": False}

# Duration units in seconds
DURATION_UNITS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
}

ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

_SPACE = re.compile(r"[ \t\r\n]+")
_LINE_COMMENT = re.compile(r"#[^\n]*")
_NUMBER = re.compile(r"(\d+(?:\.\d+)?)([A-Za-z]*)")
_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")
_PUNCTUATION = {
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    ";": TokenType.SEMICOLON,
}


class Lexer:
    """
    Tokenizer for the configuration syntax.

    Example config:
        prometheus {
            url "http://prometheus:9090";
            timeout 30s;
        }
    """

    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0

    def _location(self, pos: int) -> tuple[int, int]:
        line = self.source.count("\n", 0, pos) + 1
        column = pos - (self.source.rfind("\n", 0, pos) + 1) + 1
        return line, column

    def _error(self, message: str, pos: int) -> LexerError:
        return LexerError(message, *self._location(pos))

    def _skip_ignored(self) -> None:
        """Skip whitespace and comments."""
        while self.pos < len(self.source):
            match = _SPACE.match(self.source, self.pos) or _LINE_COMMENT.match(
                self.source, self.pos
            )
            if match:
                self.pos = match.end()
                continue

            if self.source.startswith("/*", self.pos):
                end = self.source.find("*/", self.pos + 2)
                if end < 0:
                    raise self._error("Unterminated multi-line comment", self.pos)
                self.pos = end + 2
                continue

            return

    def _read_string(self) -> str:
        start = self.pos
        quote = self.source[self.pos]
        self.pos += 1
        chars: list[str] = []

        while self.pos < len(self.source):
            char = self.source[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if char == "\n":
                break
            if char == "\\":
                self.pos += 1
                if self.pos >= len(self.source):
                    break
                escaped = self.source[self.pos]
                chars.append(ESCAPES.get(escaped, escaped))
            else:
                chars.append(char)
            self.pos += 1

        raise self._error("Unterminated string literal", start)

    def next_token(self) -> Token:
        """Get the next token from the source."""
        self._skip_ignored()
        start = self.pos
        line, column = self._location(start)

        if start >= len(self.source):
            return Token(TokenType.EOF, "", line, column)

        char = self.source[start]

        if char in _PUNCTUATION:
            self.pos += 1
            return Token(_PUNCTUATION[char], char, line, column)

        if char in "\"'":
            return Token(TokenType.STRING, self._read_string(), line, column)

        number = _NUMBER.match(self.source, start)
        if number:
            self.pos = number.end()
            digits, unit = number.groups()
            value = float(digits) if "." in digits else int(digits)
            if not unit:
                return Token(TokenType.NUMBER, value, line, column)
            if unit.lower() not in DURATION_UNITS:
                raise LexerError(f"Unknown duration unit: {unit}", line, column)
            return Token(TokenType.DURATION, value * DURATION_UNITS[unit.lower()], line, column)

        word = _IDENTIFIER.match(self.source, start)
        if word:
            self.pos = word.end()
            raw = word.group()
            if raw.lower() in BOOLEAN_KEYWORDS:
                return Token(TokenType.BOOLEAN, BOOLEAN_KEYWORDS[raw.lower()], line, column)
            return Token(TokenType.IDENTIFIER, raw, line, column)

        raise LexerError(f"Unexpected character: {char!r}", line, column)

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(source, filename))
