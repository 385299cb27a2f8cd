import sys

from ai_commit.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
