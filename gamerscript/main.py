"""Runs .gs files or the interactive shell. Also wraps everything in the error handling context manager. Called from
the `gamerscript` console script.
"""

import argparse
import sys

from gamerscript.lang.error import ErrorHandler
from gamerscript.lang.highlight import to_html, to_terminal
from gamerscript.lang.session import Session
from gamerscript.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="gamerscript", description="GamerScript interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print the token stream instead of running")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of running")
    parser.add_argument("--highlight", choices=["terminal", "html"], help="print highlighted source instead of running")
    return parser


def main(argv=None):
    """Runs GamerScript interpreter. Called from gamerscript executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.file is None:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        sess = Session(error_handler, args.file, cmd_line=False)
        if args.tokens:
            for token in sess.tokens():
                print(repr(token))
        elif args.ast:
            print(sess.dump())
        elif args.highlight == "terminal":
            sys.stdout.write(to_terminal(sess.tokens()))
        elif args.highlight == "html":
            print(to_html(sess.tokens()))
        else:
            sess.run()


if __name__ == "__main__":
    main()
