import sys

from netparams.cli import main

sys.exit(main())
