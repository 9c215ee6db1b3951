import sys

from nonmyopic.cli import main

sys.exit(main())
