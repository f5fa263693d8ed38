"""Token model. TokenKind values are laid out in contiguous ranges (keywords, operators, delimiters, others) so that a
token's category is a pair of comparisons rather than a table lookup.
"""

from dataclasses import dataclass
from enum import IntEnum


class TokenKind(IntEnum):
    # keywords
    VAR = 0
    FUNCTION = 1
    IF = 2
    ELIF = 3
    ELSE = 4
    TRUE = 5
    FALSE = 6
    WHILE = 7
    RETURN = 8
    INCREMENT = 9
    DECREMENT = 10

    # operators
    PLUS = 20
    MINUS = 21
    STAR = 22
    SLASH = 23
    ASSIGN = 24
    EQUALS = 25
    GREATER = 26
    GREATER_EQUAL = 27
    LESS = 28
    LESS_EQUAL = 29

    # delimiters
    LEFT_PAREN = 40
    RIGHT_PAREN = 41
    LEFT_BRACE = 42
    RIGHT_BRACE = 43
    COMMA = 44

    # others
    IDENTIFIER = 60
    NUMBER = 61
    STRING = 62
    COMMENT = 63
    NEWLINE = 64
    WHITESPACE = 65
    EOF = 66

    @property
    def is_keyword(self):
        return TokenKind.VAR <= self <= TokenKind.DECREMENT

    @property
    def is_operator(self):
        return TokenKind.PLUS <= self <= TokenKind.LESS_EQUAL

    @property
    def is_delimiter(self):
        return TokenKind.LEFT_PAREN <= self <= TokenKind.COMMA

    @property
    def is_trivia(self):
        return self in (TokenKind.COMMENT, TokenKind.WHITESPACE)


KEYWORDS = {
    "loot": TokenKind.VAR,
    "dlc": TokenKind.FUNCTION,
    "clutch": TokenKind.IF,
    "retry": TokenKind.ELIF,
    "ragequit": TokenKind.ELSE,
    "buffed": TokenKind.TRUE,
    "nerfed": TokenKind.FALSE,
    "farm": TokenKind.WHILE,
    "spawn": TokenKind.RETURN,
    "buff": TokenKind.INCREMENT,
    "nerf": TokenKind.DECREMENT,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    lexeme: str
    line: int

    def __repr__(self):
        return f"Token({self.kind.name}, {self.lexeme!r}, line={self.line})"
