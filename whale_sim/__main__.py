import sys

from whale_sim.cli import main

sys.exit(main())
