import sys

from jsonxml.cli import main

sys.exit(main())
