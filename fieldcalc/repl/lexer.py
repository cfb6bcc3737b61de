"""
Tokenizer for calculator commands and expressions.

Token Kinds:
    - SPECIAL: one of + * / [ ] ( ) or a lone -
    - LITERAL: a run of digits, optionally preceded by a - that is
      immediately followed by a digit ("-12" is one literal)
    - NAME: a letter or underscore followed by letters, digits, underscores
    - END: no more input

Spaces and tabs separate tokens and are otherwise ignored.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional
import string

from ..common.errors import UnknownCharacterError


SPECIAL_CHARACTERS = "+*/[]()"
_NAME_START = string.ascii_letters + "_"
_NAME_BODY = _NAME_START + string.digits


class TokenType(Enum):
    SPECIAL = "special"
    LITERAL = "literal"
    NAME = "name"
    END = "end"


@dataclass(frozen=True)
class Token:
    """A token and the position where it starts."""
    type: TokenType
    text: str
    position: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.value}, {self.text!r})"


class Lexer:
    """
    Splits one line of input into tokens on demand.

    Example:
        >>> [t.text for t in Lexer("+ a -3")]
        ['+', 'a', '-3']
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self._peeked: Optional[Token] = None

    def _skip_blanks(self) -> None:
        while self.position < len(self.text) and self.text[self.position] in " \t":
            self.position += 1

    def _take_while(self, allowed: str) -> str:
        start = self.position
        while self.position < len(self.text) and self.text[self.position] in allowed:
            self.position += 1
        return self.text[start:self.position]

    def _scan(self) -> Token:
        self._skip_blanks()
        start = self.position
        if start >= len(self.text):
            return Token(TokenType.END, "", start)

        char = self.text[start]

        if char in SPECIAL_CHARACTERS:
            self.position += 1
            return Token(TokenType.SPECIAL, char, start)

        if char == "-":
            self.position += 1
            following = self.text[self.position:self.position + 1]
            if following and following in string.digits:
                return Token(TokenType.LITERAL, "-" + self._take_while(string.digits), start)
            return Token(TokenType.SPECIAL, "-", start)

        if char in string.digits:
            return Token(TokenType.LITERAL, self._take_while(string.digits), start)

        if char in _NAME_START:
            return Token(TokenType.NAME, self._take_while(_NAME_BODY), start)

        raise UnknownCharacterError(char)

    def next_token(self) -> Token:
        """Consume and return the next token (END once input runs out)."""
        if self._peeked is not None:
            token, self._peeked = self._peeked, None
            return token
        return self._scan()

    def peek(self) -> Token:
        """Return the next token without consuming it."""
        if self._peeked is None:
            self._peeked = self._scan()
        return self._peeked

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token.type is TokenType.END:
                return
            yield token
