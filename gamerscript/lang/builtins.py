"""Built-in GamerScript functions. Built-ins are resolved before user functions, so a user `dlc` with the same name
is never called. Arguments are evaluated lazily, by position, in the caller's environment.
"""

import sys
import time

from gamerscript.lang.error import ArityMismatch
from gamerscript.lang import values


BUILTINS = {}


def builtin(name):
    """Registers the decorated function as built-in name."""

    def register(fn):
        BUILTINS[name] = fn
        return fn

    return register


def _arg(interpreter, call, idx, default=None, required=True):
    """Evaluates argument idx of call. Missing required arguments raise ArityMismatch."""
    if idx < len(call.args):
        return interpreter.evaluate(call.args[idx])
    if required:
        raise ArityMismatch(call.name.lexeme, idx + 1, len(call.args), call.line)
    return default


def _write(interpreter, text):
    interpreter.stdout.write(text)
    interpreter.stdout.flush()


@builtin("taunt")
def taunt(interpreter, call):
    """print(value, newline=true)"""
    text = values.stringify(_arg(interpreter, call, 0, required=False))
    newline = _arg(interpreter, call, 1, default=True, required=False)
    _write(interpreter, text + "\n" if values.truthy(newline) else text)


@builtin("quest")
def quest(interpreter, call):
    """input([prompt]): returns one line from stdin without its newline, or null at end of input."""
    if call.args:
        _write(interpreter, values.stringify(_arg(interpreter, call, 0)) + "\n")

    stdin = interpreter.stdin if interpreter.stdin is not None else sys.stdin
    if stdin is None:
        return None
    line = stdin.readline()
    if not line:
        return None
    return line[:-1] if line.endswith("\n") else line


@builtin("afk")
def afk(interpreter, call):
    """sleep(seconds)"""
    time.sleep(max(0.0, values.to_number(_arg(interpreter, call, 0), call.line)))


@builtin("lag")
def lag(interpreter, call):
    """sleep(milliseconds)"""
    time.sleep(max(0.0, values.to_number(_arg(interpreter, call, 0), call.line)) / 1000)


@builtin("stat")
def stat(interpreter, call):
    return values.to_number(_arg(interpreter, call, 0), call.line)


@builtin("chat")
def chat(interpreter, call):
    return values.stringify(_arg(interpreter, call, 0))


@builtin("patch")
def patch(interpreter, call):
    return values.truthy(_arg(interpreter, call, 0))


@builtin("gameover")
def gameover(interpreter, call):
    """exit(code): ends the whole process."""
    code = int(values.to_number(_arg(interpreter, call, 0), call.line))
    interpreter.stdout.flush()
    raise SystemExit(code)
