"""GamerScript abstract syntax tree. Nodes are frozen dataclasses: the tree is built once by the parser and never
mutated afterwards. Traversals subclass NodeVisitor, which declares one abstract method per node kind, so a traversal
missing a kind cannot be instantiated.

```
<expr> ::= Binary(left, op, right) | Unary(op, operand) | Literal(token) | Variable(name) | Call(name, args)
<stmt> ::= ExpressionStmt | VarDecl | Block | If | While | FuncDecl | Return | Assign | Increment | Decrement
         | EndOfFile
```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from gamerscript.lang.tokens import Token


class Node(ABC):
    """Superclass of every tree node."""

    @property
    @abstractmethod
    def line(self):
        """Source line the node starts on (0 if unknown)."""

    def accept(self, visitor):
        return getattr(visitor, f"visit_{type(self).__name__.lower()}")(self)


class Expr(Node, ABC):
    pass


class Stmt(Node, ABC):
    pass


# expressions

@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    op: Token
    right: Expr

    @property
    def line(self):
        return self.op.line


@dataclass(frozen=True)
class Unary(Expr):
    op: Token
    operand: Expr

    @property
    def line(self):
        return self.op.line


@dataclass(frozen=True)
class Literal(Expr):
    token: Token

    @property
    def line(self):
        return self.token.line


@dataclass(frozen=True)
class Variable(Expr):
    name: Token

    @property
    def line(self):
        return self.name.line


@dataclass(frozen=True)
class Call(Expr):
    name: Token
    args: Tuple[Expr, ...]

    @property
    def line(self):
        return self.name.line


# statements

@dataclass(frozen=True)
class ExpressionStmt(Stmt):
    expr: Expr

    @property
    def line(self):
        return self.expr.line


@dataclass(frozen=True)
class VarDecl(Stmt):
    name: Token
    initializer: Optional[Expr]

    @property
    def line(self):
        return self.name.line


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]

    @property
    def line(self):
        return self.statements[0].line if self.statements else 0


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    elif_branches: Tuple[Tuple[Expr, Stmt], ...]
    else_branch: Optional[Stmt]

    @property
    def line(self):
        return self.condition.line


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt

    @property
    def line(self):
        return self.condition.line


@dataclass(frozen=True)
class FuncDecl(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Block

    @property
    def line(self):
        return self.name.line


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]

    @property
    def line(self):
        return self.keyword.line


@dataclass(frozen=True)
class Assign(Stmt):
    target: Variable
    value: Expr

    @property
    def line(self):
        return self.target.line


@dataclass(frozen=True)
class Increment(Stmt):
    name: Token

    @property
    def line(self):
        return self.name.line


@dataclass(frozen=True)
class Decrement(Stmt):
    name: Token

    @property
    def line(self):
        return self.name.line


@dataclass(frozen=True)
class EndOfFile(Stmt):
    """Sentinel emitted when a statement is requested but only EOF remains."""
    eof: Token

    @property
    def line(self):
        return self.eof.line


class NodeVisitor(ABC):

    @abstractmethod
    def visit_binary(self, node): ...

    @abstractmethod
    def visit_unary(self, node): ...

    @abstractmethod
    def visit_literal(self, node): ...

    @abstractmethod
    def visit_variable(self, node): ...

    @abstractmethod
    def visit_call(self, node): ...

    @abstractmethod
    def visit_expressionstmt(self, node): ...

    @abstractmethod
    def visit_vardecl(self, node): ...

    @abstractmethod
    def visit_block(self, node): ...

    @abstractmethod
    def visit_if(self, node): ...

    @abstractmethod
    def visit_while(self, node): ...

    @abstractmethod
    def visit_funcdecl(self, node): ...

    @abstractmethod
    def visit_return(self, node): ...

    @abstractmethod
    def visit_assign(self, node): ...

    @abstractmethod
    def visit_increment(self, node): ...

    @abstractmethod
    def visit_decrement(self, node): ...

    @abstractmethod
    def visit_endoffile(self, node): ...


class NodePrinter(NodeVisitor):
    """Renders a tree as an indented S-expression, one statement per line. Used by `--ast` and the parser tests.

    Format:
    (var x
        (+ 1 2))
    """
    INDENT = "    "

    def __init__(self):
        self.depth = 0

    def dump(self, statements):
        return "\n".join(stmt.accept(self) for stmt in statements)

    def _nested(self, head, *children):
        self.depth += 1
        try:
            rendered = [child.accept(self) for child in children]
        finally:
            self.depth -= 1
        pad = "\n" + self.INDENT * (self.depth + 1)
        return f"({head}" + "".join(pad + child for child in rendered) + ")"

    def visit_binary(self, node):
        return f"({node.op.lexeme} {node.left.accept(self)} {node.right.accept(self)})"

    def visit_unary(self, node):
        return f"({node.op.lexeme} {node.operand.accept(self)})"

    def visit_literal(self, node):
        return node.token.lexeme

    def visit_variable(self, node):
        return node.name.lexeme

    def visit_call(self, node):
        return "(call " + " ".join([node.name.lexeme] + [arg.accept(self) for arg in node.args]) + ")"

    def visit_expressionstmt(self, node):
        return f"(expr {node.expr.accept(self)})"

    def visit_vardecl(self, node):
        if node.initializer is None:
            return f"(var {node.name.lexeme})"
        return f"(var {node.name.lexeme} {node.initializer.accept(self)})"

    def visit_block(self, node):
        return self._nested("block", *node.statements)

    def visit_if(self, node):
        head = f"if {node.condition.accept(self)}"
        children = [node.then_branch]
        for condition, branch in node.elif_branches:
            children.append(_Labelled(f"elif {condition.accept(self)}", branch))
        if node.else_branch is not None:
            children.append(_Labelled("else", node.else_branch))
        return self._nested(head, *children)

    def visit_while(self, node):
        return self._nested(f"while {node.condition.accept(self)}", node.body)

    def visit_funcdecl(self, node):
        params = " ".join(param.lexeme for param in node.params)
        return self._nested(f"func {node.name.lexeme} ({params})", *node.body.statements)

    def visit_return(self, node):
        if node.value is None:
            return "(return)"
        return f"(return {node.value.accept(self)})"

    def visit_assign(self, node):
        return f"(set {node.target.name.lexeme} {node.value.accept(self)})"

    def visit_increment(self, node):
        return f"(inc {node.name.lexeme})"

    def visit_decrement(self, node):
        return f"(dec {node.name.lexeme})"

    def visit_endoffile(self, node):
        return "(eof)"


class _Labelled:
    """Branch wrapper so NodePrinter can render elif/else clauses as nested children."""

    def __init__(self, label, stmt):
        self.label = label
        self.stmt = stmt

    def accept(self, printer):
        return printer._nested(self.label, self.stmt)
