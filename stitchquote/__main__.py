import sys

from stitchquote.cli import main

sys.exit(main())
