"""Error handling for GamerScript. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every phase (lexing, parsing, running) aborts on its first error. There is no recovery.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Base class of every GamerScript error. msg is human-readable, line is the 1-based source line (if known)."""

    def __init__(self, msg, line=None, internal=False):
        self.msg = msg
        self.line = line
        self.internal = internal
        super().__init__(str(self))

    def __str__(self):
        if self.line is None:
            return self.msg
        return f"{self.msg} at line {self.line}"


class LexError(GenericException):
    """Raised while turning source text into tokens."""


class UnexpectedCharacter(LexError):

    def __init__(self, char, line):
        super().__init__(f"unexpected character '{char}'", line)
        self.char = char


class UnterminatedString(LexError):

    def __init__(self, line):
        super().__init__("unterminated string literal", line)


class UnterminatedComment(LexError):

    def __init__(self, line):
        super().__init__("unterminated comment", line)


class InvalidNumberFormat(LexError):

    def __init__(self, lexeme, line):
        super().__init__(f"invalid number format '{lexeme}'", line)
        self.lexeme = lexeme


class ParseError(GenericException):
    """Raised on an unexpected or missing token."""


class ScriptRuntimeError(GenericException):
    """Raised while running a program."""


class UndefinedVariable(ScriptRuntimeError):

    def __init__(self, name, line=None):
        super().__init__(f"undefined variable '{name}'", line)
        self.name = name


class UndefinedFunction(ScriptRuntimeError):

    def __init__(self, name, line=None):
        super().__init__(f"undefined function '{name}'", line)
        self.name = name


class CallDepthExceeded(ScriptRuntimeError):

    def __init__(self, name, limit, line=None):
        super().__init__(f"calling '{name}' exceeds the maximum call depth of {limit}", line)


class TypeMismatch(ScriptRuntimeError):
    """Operator applied to operands of kinds it has no rule for."""


class ArityMismatch(ScriptRuntimeError):

    def __init__(self, name, expected, got, line=None):
        super().__init__(f"'{name}' expects {expected} argument(s), got {got}", line)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print GamerScript errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr, flush=True)

    def warn(self, msg, line=None):
        """Prints a warning. Never fatal."""
        location = ""
        if self.traceback:
            file = next(iter(self.traceback))
            location = f"{file}:{line}: " if line is not None else f"{file}: "

        warning_msg = colored(location, attrs=["bold"]) if location else ""
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg
        self._print(warning_msg)

    def throw(self, error):
        """Prints error, a GenericException, preceded by whatever lines are registered in self.traceback."""
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line.strip()}\n"
                lines += 1

        if lines:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        self._print(error_msg)

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.traceback[path] = (None, None)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
