import sys

from heartmaze.cli import main

sys.exit(main())
