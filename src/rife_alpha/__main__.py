import sys

from rife_alpha.cli.main import main

sys.exit(main())
