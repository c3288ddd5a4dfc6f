import sys

from token_merge.cli import main

sys.exit(main())
