import sys

from ephemurl.cli import main


sys.exit(main())
