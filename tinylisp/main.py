"""Uses the tinylisp session to interpret tinylisp files or run in command-line mode. Also uses the error handling
context manager. Called from the tinylisp console script.
"""

import argparse
import sys

from tinylisp.lang.error import ErrorHandler
from tinylisp.lang.session import Session
from tinylisp.lang.shell import Shell


RECURSION_LIMIT = 10000  # recursive user functions nest several Python frames per call


def main():
    """Runs tinylisp interpreter. Called from tinylisp console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="tinylisp")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-v", "--verbose", help="print each parse/eval step", action="store_true")
        parser.add_argument("--recursion-limit", help="maximum Python recursion depth", type=int,
                            default=RECURSION_LIMIT)
        args = parser.parse_args()

        error_handler.verbose = args.verbose
        sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
