"""GamerScript runtime values and the operators defined on them.

Runtime values are plain Python objects of exactly four kinds:

    null    -> None
    boolean -> bool
    number  -> float (always float, never int)
    string  -> str

Operators are resolved through explicit (operator, left kind, right kind) rules. Any pair without a rule raises
TypeMismatch.
"""

import math
import operator
import re

from gamerscript.lang.error import ScriptRuntimeError, TypeMismatch
from gamerscript.lang.tokens import TokenKind


# plain decimal text only: no underscores, no inf/nan spellings
NUMBER_TEXT = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

NULL = "null"
BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"


def kind_of(value):
    """Returns the GamerScript kind name of value."""
    if value is None:
        return NULL
    if isinstance(value, bool):  # checked before float: bool is not a number here
        return BOOLEAN
    if isinstance(value, float):
        return NUMBER
    if isinstance(value, str):
        return STRING
    raise ScriptRuntimeError(f"'{type(value).__name__}' is not a GamerScript value", internal=True)


def stringify(value):
    """Default textual representation: 5.0 -> '5', 0.5 -> '0.5', True -> 'True', None -> ''."""
    kind = kind_of(value)
    if kind == NULL:
        return ""
    if kind == NUMBER:
        if value.is_integer() and abs(value) < 1e16:
            return str(int(value))
        return repr(value)
    return str(value)


def truthy(value):
    kind = kind_of(value)
    if kind == NULL:
        return False
    if kind == NUMBER:
        return value != 0
    if kind == STRING:
        return value != ""
    return value


def to_number(value, line=None):
    kind = kind_of(value)
    if kind == NULL:
        return 0.0
    if kind == BOOLEAN:
        return 1.0 if value else 0.0
    if kind == STRING:
        text = value.strip()
        if not NUMBER_TEXT.fullmatch(text):
            raise ScriptRuntimeError(f"cannot convert '{value}' to a number", line)
        return float(text)
    return value


def _divide(left, right):
    """IEEE-754 division: n/0 is +-inf, 0/0 is nan."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _concat(left, right):
    return stringify(left) + stringify(right)


NUMERIC = {
    TokenKind.PLUS: operator.add,
    TokenKind.MINUS: operator.sub,
    TokenKind.STAR: operator.mul,
    TokenKind.SLASH: _divide,
    TokenKind.GREATER: operator.gt,
    TokenKind.GREATER_EQUAL: operator.ge,
    TokenKind.LESS: operator.lt,
    TokenKind.LESS_EQUAL: operator.le,
}

# (op, left kind, right kind): rule
RULES = {(op, NUMBER, NUMBER): fn for op, fn in NUMERIC.items()}
for _kind in (NULL, BOOLEAN, NUMBER, STRING):
    RULES[(TokenKind.PLUS, STRING, _kind)] = _concat
    RULES[(TokenKind.PLUS, _kind, STRING)] = _concat
    RULES[(TokenKind.EQUALS, _kind, _kind)] = operator.eq


def binary(op, left, right, line=None):
    """Applies binary operator op (a TokenKind) to left and right."""
    left_kind, right_kind = kind_of(left), kind_of(right)

    if op is TokenKind.EQUALS and left_kind != right_kind:
        return False  # values of different kinds are never equal

    rule = RULES.get((op, left_kind, right_kind))
    if rule is None:
        raise TypeMismatch(f"unsupported operand kinds for '{_SYMBOLS.get(op, op.name)}': "
                           f"{left_kind} and {right_kind}", line)
    return rule(left, right)


def negate(value, line=None):
    if kind_of(value) != NUMBER:
        raise TypeMismatch(f"unsupported operand kind for unary '-': {kind_of(value)}", line)
    return -value


_SYMBOLS = {
    TokenKind.PLUS: "+",
    TokenKind.MINUS: "-",
    TokenKind.STAR: "*",
    TokenKind.SLASH: "/",
    TokenKind.EQUALS: "==",
    TokenKind.GREATER: ">",
    TokenKind.GREATER_EQUAL: ">=",
    TokenKind.LESS: "<",
    TokenKind.LESS_EQUAL: "<=",
}
