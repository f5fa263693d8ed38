"""Tree-walking interpreter for GamerScript.

Scoping is deliberately not lexical. There is one variable mapping. A call snapshots it, binds the parameters into
the live mapping (so the callee sees every caller variable) and, on every exit path, restores the snapshot verbatim.
Any mutation made during a call, including reassignment of a variable that existed before it, is rolled back. Only
the return value escapes.

`spawn` (return) does not raise: every statement yields a Completion that is either normal or carries a returned
value, and every caller of `execute` propagates returned completions.
"""

import sys
from dataclasses import dataclass
from typing import Any

from gamerscript.lang import values
from gamerscript.lang.builtins import BUILTINS
from gamerscript.lang.error import (ArityMismatch, CallDepthExceeded, TypeMismatch, UndefinedFunction,
                                    UndefinedVariable)
from gamerscript.lang.lexical import tokenize, unescape
from gamerscript.lang.nodes import NodeVisitor
from gamerscript.lang.parser import parse
from gamerscript.lang.tokens import TokenKind


MAX_CALL_DEPTH = 2000
FRAMES_PER_CALL = 30  # Python frames one GamerScript call needs, nested expressions included


@dataclass(frozen=True)
class Completion:
    """Outcome of executing a statement."""
    returned: bool = False
    value: Any = None


NORMAL = Completion()


class Environment:
    """Single name: value mapping plus a stack of call snapshots."""

    def __init__(self):
        self.values = {}
        self.snapshots = []

    def get(self, name, line=None):
        try:
            return self.values[name]
        except KeyError:
            raise UndefinedVariable(name, line)

    def set(self, name, value):
        self.values[name] = value

    def push_call(self):
        """Saves a full copy of the current bindings. Must be paired with pop_call."""
        self.snapshots.append(dict(self.values))

    def pop_call(self):
        """Discards every current binding and restores the most recent snapshot."""
        self.values = self.snapshots.pop()

    @property
    def depth(self):
        return len(self.snapshots)


class Interpreter(NodeVisitor):
    """Executes statements for effect. stdout is the output sink, stdin the input source (both default to sys)."""

    def __init__(self, stdout=None, stdin=None):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin = stdin
        self.env = Environment()
        self.functions = {}

        limit = MAX_CALL_DEPTH * FRAMES_PER_CALL
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)

    def run(self, source):
        """Lexes, parses and interprets source."""
        return self.interpret(parse(tokenize(source)))

    def interpret(self, statements):
        """Executes statements in order. Returns the returned Completion if a top-level `spawn` stopped the program,
        NORMAL otherwise.
        """
        for stmt in statements:
            completion = self.execute(stmt)
            if completion.returned:
                return completion
        return NORMAL

    def execute(self, stmt):
        return stmt.accept(self)

    def evaluate(self, expr):
        return expr.accept(self)

    # expressions

    def visit_literal(self, node):
        token = node.token
        if token.kind is TokenKind.NUMBER:
            return float(token.lexeme)
        if token.kind is TokenKind.STRING:
            return unescape(token.lexeme)
        return token.kind is TokenKind.TRUE

    def visit_variable(self, node):
        return self.env.get(node.name.lexeme, node.line)

    def visit_unary(self, node):
        return values.negate(self.evaluate(node.operand), node.line)

    def visit_binary(self, node):
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return values.binary(node.op.kind, left, right, node.line)

    def visit_call(self, node):
        name = node.name.lexeme
        if name in BUILTINS:
            return BUILTINS[name](self, node)

        function = self.functions.get(name)
        if function is None:
            raise UndefinedFunction(name, node.line)
        if len(node.args) < len(function.params):
            raise ArityMismatch(name, len(function.params), len(node.args), node.line)

        args = [self.evaluate(arg) for arg in node.args]
        if self.env.depth >= MAX_CALL_DEPTH:
            raise CallDepthExceeded(name, MAX_CALL_DEPTH, node.line)

        self.env.push_call()
        try:
            for param, value in zip(function.params, args):
                self.env.set(param.lexeme, value)

            for stmt in function.body.statements:
                completion = self.execute(stmt)
                if completion.returned:
                    return completion.value
            return None
        finally:
            self.env.pop_call()

    # statements

    def visit_expressionstmt(self, node):
        self.evaluate(node.expr)
        return NORMAL

    def visit_vardecl(self, node):
        value = self.evaluate(node.initializer) if node.initializer is not None else None
        self.env.set(node.name.lexeme, value)
        return NORMAL

    def visit_assign(self, node):
        self.env.set(node.target.name.lexeme, self.evaluate(node.value))
        return NORMAL

    def visit_block(self, node):
        for stmt in node.statements:
            completion = self.execute(stmt)
            if completion.returned:
                return completion
        return NORMAL

    def visit_if(self, node):
        if values.truthy(self.evaluate(node.condition)):
            return self.execute(node.then_branch)

        for condition, branch in node.elif_branches:
            if values.truthy(self.evaluate(condition)):
                return self.execute(branch)

        if node.else_branch is not None:
            return self.execute(node.else_branch)
        return NORMAL

    def visit_while(self, node):
        while values.truthy(self.evaluate(node.condition)):
            completion = self.execute(node.body)
            if completion.returned:
                return completion
        return NORMAL

    def visit_funcdecl(self, node):
        self.functions[node.name.lexeme] = node  # last declaration wins
        return NORMAL

    def visit_return(self, node):
        value = self.evaluate(node.value) if node.value is not None else None
        return Completion(returned=True, value=value)

    def _step(self, node, delta):
        name = node.name.lexeme
        value = self.env.get(name, node.line)
        if values.kind_of(value) != values.NUMBER:
            raise TypeMismatch(f"cannot step '{name}' of kind {values.kind_of(value)}", node.line)
        self.env.set(name, value + delta)
        return NORMAL

    def visit_increment(self, node):
        return self._step(node, 1.0)

    def visit_decrement(self, node):
        return self._step(node, -1.0)

    def visit_endoffile(self, node):
        return NORMAL
