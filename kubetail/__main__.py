import sys

from kubetail.main import main

if __name__ == "__main__":
    sys.exit(main())
