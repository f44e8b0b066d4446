import sys

from toyc.cli import main

# Usage: python compile.py data/valid/factorial.tl
sys.exit(main())
