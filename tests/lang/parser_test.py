import unittest

from gamerscript.lang.error import ParseError
from gamerscript.lang.lexical import tokenize
from gamerscript.lang.nodes import Assign, Call, EndOfFile, ExpressionStmt, NodePrinter, VarDecl, Variable
from gamerscript.lang.parser import Parser, parse


def dump(source):
    return NodePrinter().dump(parse(tokenize(source)))


class ExpressionTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "loot x = 1 + 2 * 3": "(var x (+ 1 (* 2 3)))",
            "loot x = 1 - 2 - 3": "(var x (- (- 1 2) 3))",
            "loot x = 8 / 4 * 2": "(var x (* (/ 8 4) 2))",
            "loot x = -1 - -2": "(var x (- (- 1) (- 2)))",
            "loot x = --a": "(var x (- (- a)))",
            "loot x = a == b < c + 1": "(var x (== a (< b (+ c 1))))",
            "loot x = a >= b == c <= d": "(var x (== (>= a b) (<= c d)))",
            "loot x = (1 + 2) * 3": "(var x (* (+ 1 2) 3))",
            'loot x = "s" + buffed + nerfed': '(var x (+ (+ "s" buffed) nerfed))',
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)

    def test_calls(self):
        cases = {
            "f()": "(expr (call f))",
            "f(1, g(2), a + b)": "(expr (call f 1 (call g 2) (+ a b)))",
            "x = f(-1)": "(set x (call f (- 1)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)


class StatementTestCase(unittest.TestCase):

    def test_simple(self):
        cases = {
            "loot x": "(var x)",
            "loot x = 1\nx = x + 1\n": "(var x 1)\n(set x (+ x 1))",
            "loot x = 1\n\n": "(var x 1)\n(eof)",
            "buff i\nnerf j": "(inc i)\n(dec j)",
            "x": "(expr x)",
            "\n\n\ntaunt(1)\n\n": "(expr (call taunt 1))\n(eof)",
            "farm i < 3 {\n  buff i\n}": "(while (< i 3)\n    (block\n        (inc i)))",
            "{\n}": "(block)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)

    def test_function_and_if(self):
        source = ("dlc f(a, b) {\n"
                  "  clutch a > b {\n"
                  "    spawn a\n"
                  "  } retry a == b {\n"
                  "    spawn 0\n"
                  "  } ragequit {\n"
                  "    spawn b\n"
                  "  }\n"
                  "}\n")
        expected = ("(func f (a b)\n"
                    "    (if (> a b)\n"
                    "        (block\n"
                    "            (return a))\n"
                    "        (elif (== a b)\n"
                    "            (block\n"
                    "                (return 0)))\n"
                    "        (else\n"
                    "            (block\n"
                    "                (return b)))))\n"
                    "(eof)")
        self.assertEqual(expected, dump(source))

    def test_single_statement_bodies(self):
        cases = {
            "clutch a taunt(1)": "(if a\n    (expr (call taunt 1)))",
            "clutch a\nbuff x": "(if a\n    (inc x))",
            "farm a nerf a": "(while a\n    (dec a))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)

    def test_return(self):
        cases = {
            "dlc f() {\n  spawn\n}": "(func f ()\n    (return))",
            "dlc f() { spawn }": "(func f ()\n    (return))",
            "dlc f() { spawn 1 + 1 }": "(func f ()\n    (return (+ 1 1)))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, dump(case), case)

    def test_nodes(self):
        statements = parse(tokenize("loot a = 1\na = 2\ntaunt(a)\n\n"))
        self.assertEqual([VarDecl, Assign, ExpressionStmt, EndOfFile], [type(stmt) for stmt in statements])
        self.assertIsInstance(statements[1].target, Variable)
        self.assertIsInstance(statements[2].expr, Call)
        self.assertEqual(3, statements[2].line)

    def test_trivia_is_ignored(self):
        self.assertEqual("(var x 1)", dump("loot\tx xX one Xx = 1"))

    def test_parse_twice(self):
        parser = Parser(tokenize("loot x = 1"))
        self.assertEqual(1, len(parser.parse()))
        self.assertEqual([], parser.parse())


class ParseErrorTestCase(unittest.TestCase):

    def test_errors(self):
        should_raise = [
            "loot = 1",
            "loot x = ",
            "1 + 2",
            "x + 1",
            "taunt(1",
            "taunt(1,)",
            "loot x = 1 loot",
            "{ taunt(1)",
            ")",
            "dlc (a) {}",
            "dlc f(a b) {}",
            "dlc f(a) taunt(a)",
            "clutch",
            "buff 1",
            "x = = 1",
            "retry a {}",
            "taunt(1) taunt(2)",
        ]
        for case in should_raise:
            self.assertRaises(ParseError, parse, tokenize(case))

    def test_error_line(self):
        with self.assertRaises(ParseError) as ctx:
            parse(tokenize("loot a = 1\n\nloot = 2"))
        self.assertEqual(3, ctx.exception.line)
        self.assertIn("line 3", str(ctx.exception))

    def test_missing_eof(self):
        self.assertRaises(ParseError, Parser, tokenize("loot x")[:-1])


if __name__ == '__main__':
    unittest.main()
