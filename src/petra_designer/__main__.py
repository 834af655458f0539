import sys

from petra_designer.cli.cli_interface import main

sys.exit(main())
