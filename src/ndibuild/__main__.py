import sys

from ndibuild.cli import main

sys.exit(main())
