"""
Recursive descent parser for the nginx-like configuration syntax.

Grammar:
    document    := (block | directive)*
    block       := IDENTIFIER [STRING] '{' (block | directive)* '}'
    directive   := IDENTIFIER value* ';'
    value       := STRING | NUMBER | DURATION | BOOLEAN | IDENTIFIER
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .lexer import Lexer, Token, TokenType

VALUE_TOKENS = (
    TokenType.STRING,
    TokenType.NUMBER,
    TokenType.DURATION,
    TokenType.BOOLEAN,
    TokenType.IDENTIFIER,
)


class ParseError(Exception):
    """Exception raised for parser errors."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token:
            super().__init__(f"Line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(message)


@dataclass
class Directive:
    """
    A configuration directive with a name and values.

    Examples:
        url "http://prometheus:9090";  -> Directive(name="url", values=["http://..."])
        port 8080;                     -> Directive(name="port", values=[8080])
        namespaces "a" "b";            -> Directive(name="namespaces", values=["a", "b"])
    """

    name: str
    values: list[Any] = field(default_factory=list)
    line: int = 0
    column: int = 0

    @property
    def value(self) -> Any:
        """Get single value (first) or None."""
        return self.values[0] if self.values else None


@dataclass
class Block:
    """A configuration block with a type, optional name, and contents."""

    type: str
    name: str | None = None
    directives: list[Directive] = field(default_factory=list)
    blocks: list["Block"] = field(default_factory=list)
    line: int = 0
    column: int = 0

    def get_directive(self, name: str) -> Directive | None:
        """Get first directive with given name."""
        for d in self.directives:
            if d.name == name:
                return d
        return None

    def get_value(self, name: str, default: Any = None) -> Any:
        """Get single value from directive."""
        directive = self.get_directive(name)
        if directive and directive.values:
            return directive.value
        return default

    def get_all_values(self, name: str) -> list[Any]:
        """
        Get every value of every directive with the given name.

        Both forms below yield ["a", "b"]:
            namespaces "a" "b";

            namespaces "a";
            namespaces "b";
        """
        values: list[Any] = []
        for d in self.directives:
            if d.name == name:
                values.extend(d.values)
        return values

    def get_block(self, type_name: str) -> "Block | None":
        """Get first nested block with given type."""
        for b in self.blocks:
            if b.type == type_name:
                return b
        return None


@dataclass
class ConfigDocument:
    """Root document containing all top-level blocks and directives."""

    blocks: list[Block] = field(default_factory=list)
    directives: list[Directive] = field(default_factory=list)
    filename: str = "<string>"

    def get_block(self, type_name: str) -> Block | None:
        """Get first block with given type."""
        for b in self.blocks:
            if b.type == type_name:
                return b
        return None


class ConfigParser:
    """Parses a token stream into a ConfigDocument."""

    def __init__(self, source: str, filename: str = "<string>"):
        self.filename = filename
        self._tokens = Lexer(source, filename).tokenize()
        self.current: Token = next(self._tokens)

    def _advance(self) -> Token:
        previous = self.current
        if previous.type != TokenType.EOF:
            self.current = next(self._tokens)
        return previous

    def _check(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def _expect(self, token_type: TokenType, message: str) -> Token:
        if not self._check(token_type):
            raise ParseError(message, self.current)
        return self._advance()

    def parse(self) -> ConfigDocument:
        """Parse the entire configuration document."""
        doc = ConfigDocument(filename=self.filename)

        while not self._check(TokenType.EOF):
            item = self._parse_item("top level")
            if isinstance(item, Block):
                doc.blocks.append(item)
            else:
                doc.directives.append(item)

        return doc

    def _parse_item(self, where: str) -> Block | Directive:
        name_token = self._expect(
            TokenType.IDENTIFIER, f"Expected block or directive at {where}"
        )
        name = str(name_token.value)

        values: list[Any] = []
        while self.current.type in VALUE_TOKENS:
            values.append(self._advance().value)

        if self._check(TokenType.SEMICOLON):
            self._advance()
            return Directive(name, values, name_token.line, name_token.column)

        if not self._check(TokenType.LBRACE):
            raise ParseError(f"Expected '{{' or ';' after '{name}'", self.current)

        if len(values) > 1 or (values and not isinstance(values[0], str)):
            raise ParseError(
                f"Block '{name}' takes at most one string argument before '{{'",
                self.current,
            )

        self._advance()
        block = Block(
            type=name,
            name=values[0] if values else None,
            line=name_token.line,
            column=name_token.column,
        )

        while not self._check(TokenType.RBRACE):
            if self._check(TokenType.EOF):
                raise ParseError(f"Expected '}}' to close '{name}' block", self.current)
            item = self._parse_item(f"'{name}' block")
            if isinstance(item, Block):
                block.blocks.append(item)
            else:
                block.directives.append(item)

        self._advance()
        return block


def parse_config(source: str, filename: str = "<string>") -> ConfigDocument:
    """Parse a configuration string."""
    return ConfigParser(source, filename).parse()


def parse_config_file(path: str | Path) -> ConfigDocument:
    """Parse a configuration file."""
    path = Path(path)
    return parse_config(path.read_text(), str(path))
