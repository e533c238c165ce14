import sys

from signgrid.cli import main

if __name__ == "__main__":
    sys.exit(main())
