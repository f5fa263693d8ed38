"""Recursive descent parser for GamerScript. One token of lookahead, no backtracking, no error recovery: the first
ParseError aborts the parse.

```
<declaration> ::= <func_decl> | <var_decl> | <statement>
<func_decl>   ::= "dlc" IDENT "(" [IDENT ("," IDENT)*] ")" "{" <block>
<var_decl>    ::= "loot" IDENT ["=" <expr>] <end>
<statement>   ::= <while> | <if> | "{" <block> | <return> | <increment> | <decrement> | <expr_or_assign>
<block>       ::= <declaration>* "}"
<if>          ::= "clutch" <expr> <statement> ("retry" <expr> <statement>)* ["ragequit" <statement>]
<while>       ::= "farm" <expr> <statement>
<return>      ::= "spawn" [<expr>] <end>
<increment>   ::= "buff" IDENT
<decrement>   ::= "nerf" IDENT

<expr>        ::= <comparison> ("==" <comparison>)*
<comparison>  ::= <term> ((">" | ">=" | "<" | "<=") <term>)*
<term>        ::= <factor> (("+" | "-") <factor>)*
<factor>      ::= <unary> (("*" | "/") <unary>)*
<unary>       ::= "-" <unary> | <primary>
<primary>     ::= NUMBER | STRING | "buffed" | "nerfed" | IDENT ["(" [<expr> ("," <expr>)*] ")"] | "(" <expr> ")"

<end>         ::= NEWLINE | EOF | before "}"
```
"""

from gamerscript.lang.error import ParseError
from gamerscript.lang.lexical import significant
from gamerscript.lang.nodes import (Assign, Binary, Block, Call, Decrement, EndOfFile, ExpressionStmt, FuncDecl, If,
                                    Increment, Literal, Return, Unary, VarDecl, Variable, While)
from gamerscript.lang.tokens import TokenKind


COMPARISONS = (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL)
LITERALS = (TokenKind.NUMBER, TokenKind.STRING, TokenKind.TRUE, TokenKind.FALSE)


class Parser:

    def __init__(self, tokens):
        self.tokens = significant(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.EOF:
            raise ParseError("token stream must end with EOF")
        self.current = 0

    def parse(self):
        """Returns the list of top-level statements."""
        statements = []
        while not self._at_end():
            statements.append(self._declaration())
        return statements

    # statements

    def _declaration(self):
        self._skip_newlines()

        if self._match(TokenKind.FUNCTION):
            return self._function()
        if self._match(TokenKind.VAR):
            return self._var_declaration()
        return self._statement()

    def _function(self):
        name = self._consume(TokenKind.IDENTIFIER, "expected function name")
        self._consume(TokenKind.LEFT_PAREN, "expected '(' after function name")

        params = []
        if not self._check(TokenKind.RIGHT_PAREN):
            params.append(self._consume(TokenKind.IDENTIFIER, "expected parameter name"))
            while self._match(TokenKind.COMMA):
                params.append(self._consume(TokenKind.IDENTIFIER, "expected parameter name"))

        self._consume(TokenKind.RIGHT_PAREN, "expected ')' after parameters")
        self._consume(TokenKind.LEFT_BRACE, "expected '{' before function body")
        return FuncDecl(name, tuple(params), self._block())

    def _var_declaration(self):
        name = self._consume(TokenKind.IDENTIFIER, "expected variable name")
        initializer = self._expression() if self._match(TokenKind.ASSIGN) else None
        self._end("expected newline after variable declaration")
        return VarDecl(name, initializer)

    def _statement(self):
        self._skip_newlines()

        if self._match(TokenKind.WHILE):
            return While(self._expression(), self._statement())
        if self._match(TokenKind.IF):
            return self._if()
        if self._match(TokenKind.LEFT_BRACE):
            return self._block()
        if self._match(TokenKind.RETURN):
            return self._return()
        if self._match(TokenKind.INCREMENT):
            return Increment(self._consume(TokenKind.IDENTIFIER, "expected variable name after 'buff'"))
        if self._match(TokenKind.DECREMENT):
            return Decrement(self._consume(TokenKind.IDENTIFIER, "expected variable name after 'nerf'"))
        if self._at_end():
            return EndOfFile(self._peek())
        if self._peek().kind in LITERALS + (TokenKind.IDENTIFIER, TokenKind.MINUS, TokenKind.LEFT_PAREN):
            return self._expression_or_assignment()

        raise self._unexpected()

    def _block(self):
        """Parses the statements of a block whose '{' has already been consumed."""
        statements = []
        self._skip_newlines()
        while not self._check(TokenKind.RIGHT_BRACE) and not self._at_end():
            statements.append(self._declaration())
            self._skip_newlines()

        self._consume(TokenKind.RIGHT_BRACE, "expected '}' after block")
        return Block(tuple(statements))

    def _if(self):
        condition = self._expression()
        then_branch = self._statement()

        elif_branches = []
        while self._match(TokenKind.ELIF):
            elif_condition = self._expression()
            elif_branches.append((elif_condition, self._statement()))

        else_branch = self._statement() if self._match(TokenKind.ELSE) else None
        return If(condition, then_branch, tuple(elif_branches), else_branch)

    def _return(self):
        keyword = self._previous()
        value = None
        if not self._check(TokenKind.NEWLINE) and not self._check(TokenKind.RIGHT_BRACE) and not self._at_end():
            value = self._expression()
        self._end("expected newline after return statement")
        return Return(keyword, value)

    def _expression_or_assignment(self):
        expr = self._expression()

        if isinstance(expr, Variable) and self._match(TokenKind.ASSIGN):
            value = self._expression()
            self._end("expected newline after assignment")
            return Assign(expr, value)

        if isinstance(expr, (Variable, Call)):
            self._end("expected newline after expression")
            return ExpressionStmt(expr)

        raise ParseError("invalid expression statement", self._previous().line)

    # expressions

    def _expression(self):
        return self._equality()

    def _binary(self, operand, *kinds):
        expr = operand()
        while self._match(*kinds):
            op = self._previous()
            expr = Binary(expr, op, operand())
        return expr

    def _equality(self):
        return self._binary(self._comparison, TokenKind.EQUALS)

    def _comparison(self):
        return self._binary(self._term, *COMPARISONS)

    def _term(self):
        return self._binary(self._factor, TokenKind.PLUS, TokenKind.MINUS)

    def _factor(self):
        return self._binary(self._unary, TokenKind.STAR, TokenKind.SLASH)

    def _unary(self):
        if self._match(TokenKind.MINUS):
            op = self._previous()
            return Unary(op, self._unary())
        return self._primary()

    def _primary(self):
        if self._match(*LITERALS):
            return Literal(self._previous())

        if self._match(TokenKind.IDENTIFIER):
            name = self._previous()
            if self._match(TokenKind.LEFT_PAREN):
                return self._call(name)
            return Variable(name)

        if self._match(TokenKind.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenKind.RIGHT_PAREN, "expected ')' after expression")
            return expr

        raise self._unexpected()

    def _call(self, name):
        args = []
        if not self._check(TokenKind.RIGHT_PAREN):
            args.append(self._expression())
            while self._match(TokenKind.COMMA):
                args.append(self._expression())

        self._consume(TokenKind.RIGHT_PAREN, "expected ')' after arguments")
        return Call(name, tuple(args))

    # token helpers

    def _end(self, msg):
        """Statement terminator: a newline, or nothing at all right before EOF or a closing '}'."""
        if self._match(TokenKind.NEWLINE) or self._at_end() or self._check(TokenKind.RIGHT_BRACE):
            return
        raise ParseError(msg, self._peek().line)

    def _skip_newlines(self):
        while self._match(TokenKind.NEWLINE):
            pass

    def _match(self, *kinds):
        if any(self._check(kind) for kind in kinds):
            self._advance()
            return True
        return False

    def _check(self, kind):
        return not self._at_end() and self._peek().kind is kind

    def _at_end(self):
        return self._peek().kind is TokenKind.EOF

    def _peek(self):
        return self.tokens[self.current]

    def _previous(self):
        return self.tokens[self.current - 1]

    def _advance(self):
        token = self.tokens[self.current]
        self.current += 1
        return token

    def _consume(self, kind, msg):
        if self._check(kind):
            return self._advance()
        raise ParseError(msg, self._peek().line)

    def _unexpected(self):
        token = self._peek()
        shown = "end of file" if token.kind is TokenKind.EOF else repr(token.lexeme)
        return ParseError(f"unexpected token {shown}", token.line)


def parse(tokens):
    """Convenience wrapper: statements of a token list (trivia is filtered here)."""
    return Parser(tokens).parse()
