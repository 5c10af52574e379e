import sys

from lambda_cloner.cli import main

sys.exit(main())
