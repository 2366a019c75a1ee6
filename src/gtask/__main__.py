"""Allow running gtask as a module: python -m gtask"""

import sys

from gtask.cli import main

if __name__ == '__main__':
    sys.exit(main())
