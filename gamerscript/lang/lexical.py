"""Lexical analysis for GamerScript: turns source text into a list of Tokens.

Trivia (whitespace and comments) is kept in the token stream so that the highlighter can reproduce the source
exactly. The parser drops it via `significant`.

```
<identifier> ::= <letter> (<letter> | <digit>)*     ; keywords are identifiers found in tokens.KEYWORDS
<number>     ::= (<digit> | ".")+                   ; must be a valid float literal
<string>     ::= '"' (<char> | "\" <char>)* '"'     ; may span lines, keeps its quotes
<comment>    ::= "xX" <char>* "Xx"                  ; may span lines
```
"""

from gamerscript.lang.error import InvalidNumberFormat, UnexpectedCharacter, UnterminatedComment, UnterminatedString
from gamerscript.lang.tokens import KEYWORDS, Token, TokenKind


TAB = " " * 4
COMMENT_OPEN = "xX"
COMMENT_CLOSE = "Xx"

SINGLE = {
    ",": TokenKind.COMMA,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
}

# char: (kind alone, kind when followed by "=")
SIGNS = {
    "=": (TokenKind.ASSIGN, TokenKind.EQUALS),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
}


def normalize(source):
    """Removes \\r, \\v and \\f so that lines are counted by \\n only."""
    return source.replace("\r", "").replace("\v", "").replace("\f", "")


class Lexer:
    """Single-use scanner over one source string."""

    def __init__(self, source):
        self.source = normalize(source)
        self.pos = 0
        self.line = 1
        self.tokens = []

    def tokenize(self):
        """Returns every token in the source, trivia included, followed by a single EOF token."""
        while self.pos < len(self.source):
            self.tokens.append(self._next())
        self.tokens.append(Token(TokenKind.EOF, "", self.line))
        return self.tokens

    def _peek(self, offset=0):
        idx = self.pos + offset
        return self.source[idx] if idx < len(self.source) else ""

    def _next(self):
        char = self.source[self.pos]

        if char == "\n":
            token = Token(TokenKind.NEWLINE, "\n", self.line)
            self.pos += 1
            self.line += 1
            return token
        if char == " ":
            self.pos += 1
            return Token(TokenKind.WHITESPACE, " ", self.line)
        if char == "\t":
            self.pos += 1
            return Token(TokenKind.WHITESPACE, TAB, self.line)

        if char in SINGLE:
            self.pos += 1
            return Token(SINGLE[char], char, self.line)
        if char in SIGNS:
            alone, extended = SIGNS[char]
            if self._peek(1) == "=":
                self.pos += 2
                return Token(extended, char + "=", self.line)
            self.pos += 1
            return Token(alone, char, self.line)

        if self.source.startswith(COMMENT_OPEN, self.pos):
            return self._comment()
        if char.isalpha():
            return self._identifier()
        if char.isdigit():
            return self._number()
        if char == "\"":
            return self._string()

        raise UnexpectedCharacter(char, self.line)

    def _identifier(self):
        start = self.pos
        while self._peek().isalnum():
            self.pos += 1
        lexeme = self.source[start:self.pos]
        return Token(KEYWORDS.get(lexeme, TokenKind.IDENTIFIER), lexeme, self.line)

    def _number(self):
        start = self.pos
        while self._peek().isdigit() or self._peek() == ".":
            self.pos += 1
        lexeme = self.source[start:self.pos]
        try:
            float(lexeme)
        except ValueError:
            raise InvalidNumberFormat(lexeme, self.line)
        return Token(TokenKind.NUMBER, lexeme, self.line)

    def _string(self):
        start, start_line = self.pos, self.line
        self.pos += 1  # opening quote

        while self.pos < len(self.source) and self.source[self.pos] != "\"":
            if self.source[self.pos] == "\\" and self.pos + 1 < len(self.source):
                self.pos += 1  # escaped char never terminates the string
            if self.source[self.pos] == "\n":
                self.line += 1
            self.pos += 1

        if self.pos >= len(self.source):
            raise UnterminatedString(start_line)

        self.pos += 1  # closing quote
        return Token(TokenKind.STRING, self.source[start:self.pos], start_line)

    def _comment(self):
        start_line = self.line
        end = self.source.find(COMMENT_CLOSE, self.pos + len(COMMENT_OPEN))
        if end == -1:
            raise UnterminatedComment(start_line)

        lexeme = self.source[self.pos:end + len(COMMENT_CLOSE)]
        self.line += lexeme.count("\n")
        self.pos += len(lexeme)
        return Token(TokenKind.COMMENT, lexeme, start_line)


def tokenize(source):
    """Convenience wrapper: tokens of source, trivia included."""
    return Lexer(source).tokenize()


def significant(tokens):
    """Returns tokens without whitespace and comments, i.e. what the parser consumes."""
    return [token for token in tokens if not token.kind.is_trivia]


def unescape(lexeme):
    """Returns the in-memory string of a quote-delimited string lexeme. Unknown escapes are kept as written."""
    escapes = {"\\": "\\", "\"": "\"", "n": "\n", "t": "\t", "r": "\r"}
    body = lexeme[1:-1]

    result = []
    idx = 0
    while idx < len(body):
        char = body[idx]
        if char == "\\" and idx + 1 < len(body) and body[idx + 1] in escapes:
            result.append(escapes[body[idx + 1]])
            idx += 2
        else:
            result.append(char)
            idx += 1
    return "".join(result)
