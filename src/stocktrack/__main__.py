import sys

from stocktrack.cli import main

sys.exit(main())
