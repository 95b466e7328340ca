import sys

from topoguide.cli import main

sys.exit(main())
