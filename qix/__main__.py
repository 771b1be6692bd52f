import sys

from qix.app import main

sys.exit(main())
