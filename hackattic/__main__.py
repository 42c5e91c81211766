import sys

from hackattic.cli import main

sys.exit(main())
