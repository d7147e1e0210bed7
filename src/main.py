import sys

from infra.runner.app import main

if __name__ == "__main__":
    sys.exit(main())
