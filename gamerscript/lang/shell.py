"""Handles interactive/command-line mode for the GamerScript interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """GamerScript interpreter shell."""
    intro = "GamerScript interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary GamerScript. Lines are buffered until every '{' is closed."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt
                self.sess.add(line, self.line_num)

    def parseline(self, line):
        """Only a bare command word ('exit', 'help') is a shell command. Anything longer, or any line inside an open
        block, is GamerScript, so `exit = 3` assigns instead of quitting.
        """
        cmd_name, arg, line = super().parseline(line)
        if self._tmp_line or arg:
            return None, None, line
        return cmd_name, arg, line

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write("Welcome to GamerScript!\n\n"
                          "Declare a variable with 'loot x = 1', print it with 'taunt(x)'. Functions are declared\n"
                          "with 'dlc name(a, b) { ... }' and return with 'spawn'. Branch with 'clutch', 'retry' and\n"
                          "'ragequit', loop with 'farm', step a number with 'buff' and 'nerf'.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
