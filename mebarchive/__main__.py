import sys

from mebarchive.cli import main

sys.exit(main())
