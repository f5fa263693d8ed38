"""Session control for GamerScript. Runs a source file, or executes chunks typed at the interactive shell, against one
long-lived Interpreter (so variables and functions persist between shell chunks).
"""

from gamerscript.lang.error import GenericException, UnterminatedComment, UnterminatedString
from gamerscript.lang.interpreter import Interpreter
from gamerscript.lang.lexical import significant, tokenize
from gamerscript.lang.nodes import NodePrinter
from gamerscript.lang.parser import parse
from gamerscript.lang.tokens import TokenKind


class Session:
    """Governs a GamerScript session: one interpreter, one source (file or shell)."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, stdout=None, stdin=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.source = ""
        self.interpreter = Interpreter(stdout, stdin)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    self.source = file.read()
            except OSError:
                raise GenericException(f"'{path}' could not be opened")

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line onto the buffered prev. Returns the joined text and whether more input is needed, i.e. a block
        or string or comment is still open.
        """
        joined = f"{prev}\n{line}" if prev else line
        try:
            tokens = significant(tokenize(joined))
        except (UnterminatedString, UnterminatedComment):
            return joined, True
        except GenericException:
            return joined, False  # let add report it

        opened = sum(token.kind is TokenKind.LEFT_BRACE for token in tokens)
        closed = sum(token.kind is TokenKind.RIGHT_BRACE for token in tokens)
        return joined, opened > closed

    def tokens(self):
        return tokenize(self.source)

    def statements(self):
        return parse(self.tokens())

    def dump(self):
        """Indented dump of the parsed source."""
        return NodePrinter().dump(self.statements())

    def add(self, source, line_num):
        """Executes source. Errors propagate to the caller (normally the ErrorHandler context)."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        completion = self.interpreter.run(source)
        if completion.returned:
            self.error_handler.warn("'spawn' outside of a function stops the program", line_num)

        self.error_handler.remove_line(self.path)  # error was not raised
        return completion

    def run(self):
        """Runs the loaded file. On error, the offending source line is registered before the error is re-raised."""
        try:
            completion = self.interpreter.run(self.source)
        except GenericException as error:
            lines = self.source.replace("\r", "").split("\n")
            if error.line is not None and 0 < error.line <= len(lines):
                self.error_handler.register_line(self.path, lines[error.line - 1], error.line)
            raise

        if completion.returned:
            self.error_handler.warn("'spawn' outside of a function stops the program")
        return completion
