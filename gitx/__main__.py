import sys

from gitx.cli.main import main

sys.exit(main())
