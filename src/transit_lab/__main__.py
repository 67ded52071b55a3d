import sys

from transit_lab.cli.main_cli import main

sys.exit(main())
