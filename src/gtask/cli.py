"""
gtask CLI entry point

Usage:
    gtask                          # List all open tasks
    gtask list Shopping            # List one list
    gtask add --list Work Write report
    gtask done 2 a1                # Complete task 2 of the default list and a1
    gtask rm b 3                   # Delete task 3 of list b
"""

import sys
import signal
from typing import List, Optional

from .commands import build_registry
from .dispatcher import Dispatcher
from .errors import EXIT_BACKEND_ERROR


def _terminate(signum, frame):
    raise KeyboardInterrupt()


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point"""
    if argv is None:
        argv = sys.argv[1:]

    # SIGTERM aborts like Ctrl-C: the in-flight request is abandoned
    signal.signal(signal.SIGTERM, _terminate)

    dispatcher = Dispatcher(build_registry())

    try:
        return dispatcher.run(argv, sys.stdout, sys.stderr)
    except KeyboardInterrupt:
        print("error: cancelled", file=sys.stderr)
        return EXIT_BACKEND_ERROR


if __name__ == '__main__':
    sys.exit(main())
