import sys

from stationgen.cli import main


sys.exit(main())
