"""Syntax highlighting for GamerScript source. A pure consumer of the lexer's token stream (trivia included), so
joining every lexeme gives back the normalized source.
"""

import html

from termcolor import colored

from gamerscript.lang.tokens import TokenKind


KEYWORD = "keyword"
OPERATOR = "operator"
DELIMITER = "delimiter"
COMMENT = "comment"
NUMBER = "number"
STRING = "string"
OTHER = "other"

# category: (terminal color, html color)
PALETTE = {
    KEYWORD: ("yellow", "#e6cd69"),
    OPERATOR: ("green", "#9fca56"),
    DELIMITER: ("white", "#cfd2d1"),
    COMMENT: ("blue", "#41535b"),
    NUMBER: ("red", "#cd3f45"),
    STRING: ("cyan", "#55b5db"),
    OTHER: ("cyan", "#55b5db"),
}
BACKGROUND = "#151718"


def category(token):
    kind = token.kind
    if kind.is_keyword:
        return KEYWORD
    if kind.is_operator:
        return OPERATOR
    if kind.is_delimiter:
        return DELIMITER
    return {TokenKind.COMMENT: COMMENT, TokenKind.NUMBER: NUMBER, TokenKind.STRING: STRING}.get(kind, OTHER)


def color_for(token, html_color=False):
    terminal, hex_color = PALETTE[category(token)]
    return hex_color if html_color else terminal


def to_terminal(tokens):
    """Returns source with ANSI colors. Whitespace and newlines are left uncolored."""
    result = ""
    for token in tokens:
        if token.kind in (TokenKind.WHITESPACE, TokenKind.NEWLINE, TokenKind.EOF):
            result += token.lexeme
        else:
            result += colored(token.lexeme, color_for(token))
    return result


def to_html(tokens):
    """Returns a <code> block with one colored <span> per token."""
    spans = []
    for token in tokens:
        if token.kind is TokenKind.EOF:
            continue
        text = html.escape(token.lexeme).replace(" ", "&nbsp;").replace("\n", "<br>")
        spans.append(f"<span style='color:{color_for(token, html_color=True)};'>{text}</span>")

    return (f"<code style='font-family:\"Hack-Regular\", monospace; background-color:{BACKGROUND};'>"
            + "".join(spans) + "</code>")
