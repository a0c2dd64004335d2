# main.py

import sys

from mandelexplorer.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:] or ["explore"]))
