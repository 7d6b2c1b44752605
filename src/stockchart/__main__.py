import sys

from stockchart.cli import main

sys.exit(main())
