import re
import unittest

from gamerscript.lang.highlight import (COMMENT, DELIMITER, KEYWORD, NUMBER, OPERATOR, OTHER, STRING, PALETTE, category,
                                        color_for, to_html, to_terminal)
from gamerscript.lang.lexical import TAB, tokenize
from gamerscript.lang.tokens import Token, TokenKind


ANSI = re.compile(r"\x1b\[[0-9;]*m")

SOURCE = 'xX greet Xx\ndlc hi(name) {\n\ttaunt("hi " + name)\n}\nloot n = 1.5\n'


class HighlightTestCase(unittest.TestCase):

    def test_category(self):
        cases = {
            "loot": KEYWORD, "buffed": KEYWORD, "+": OPERATOR, "<=": OPERATOR, "=": OPERATOR, "{": DELIMITER,
            ",": DELIMITER, "xX c Xx": COMMENT, "12": NUMBER, '"s"': STRING, "name": OTHER,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, category(tokenize(case)[0]), case)

    def test_color_for(self):
        token = Token(TokenKind.IF, "clutch", 1)
        self.assertEqual(PALETTE[KEYWORD][0], color_for(token))
        self.assertEqual(PALETTE[KEYWORD][1], color_for(token, html_color=True))

    def test_lexemes_reproduce_source(self):
        joined = "".join(token.lexeme for token in tokenize(SOURCE))
        self.assertEqual(SOURCE.replace("\t", TAB), joined)

    def test_terminal(self):
        self.assertEqual(SOURCE.replace("\t", TAB), ANSI.sub("", to_terminal(tokenize(SOURCE))))

    def test_html(self):
        result = to_html(tokenize('loot s = "<a b>"\n'))
        self.assertTrue(result.startswith("<code"))
        self.assertTrue(result.endswith("</code>"))
        self.assertIn(f"<span style='color:{PALETTE[KEYWORD][1]};'>loot</span>", result)
        self.assertIn("&quot;&lt;a&nbsp;b&gt;&quot;", result)
        self.assertIn("<br>", result)
        self.assertNotIn("\n", result)


if __name__ == '__main__':
    unittest.main()
