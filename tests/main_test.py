import contextlib
import io
import os
import tempfile
import unittest

from gamerscript.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "game.gs")
        with open(self.path, "w", encoding="utf-8") as file:
            file.write('loot i = 0\nfarm i < 3 {\n    taunt("i=" + i)\n    buff i\n}\n')

    def tearDown(self):
        self.tmp.cleanup()

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            main(list(argv))
        return stdout.getvalue(), stderr.getvalue()

    def test_run(self):
        stdout, __ = self.run_main(self.path)
        self.assertEqual("i=0\ni=1\ni=2\n", stdout)

    def test_tokens(self):
        stdout, __ = self.run_main(self.path, "--tokens")
        self.assertIn("Token(VAR, 'loot', line=1)", stdout)
        self.assertIn("Token(EOF, '', line=6)", stdout)

    def test_ast(self):
        stdout, __ = self.run_main(self.path, "--ast")
        self.assertTrue(stdout.startswith("(var i 0)\n(while (< i 3)"))

    def test_highlight(self):
        stdout, __ = self.run_main(self.path, "--highlight", "html")
        self.assertTrue(stdout.startswith("<code"))

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(os.path.join(self.tmp.name, "missing.gs"))
        self.assertEqual(1, ctx.exception.code)

    def test_runtime_error_exits(self):
        with open(self.path, "w", encoding="utf-8") as file:
            file.write("taunt(1)\ntaunt(nope)\n")
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(self.path)
        self.assertEqual(1, ctx.exception.code)

    def test_gameover_code(self):
        with open(self.path, "w", encoding="utf-8") as file:
            file.write("gameover(4)\n")
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(self.path)
        self.assertEqual(4, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
