import sys

from healthprobe.cli import main

sys.exit(main())
