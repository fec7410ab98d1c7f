import sys

from dirhash.cli import main

sys.exit(main())
