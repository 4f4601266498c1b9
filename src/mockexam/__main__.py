"""Allow ``python -m mockexam`` alongside the console script."""

import sys


def main() -> int:
    # Command modules load lazily so --help stays fast.
    from mockexam.cli.app import app

    app(prog_name="mockexam")
    return 0


if __name__ == "__main__":
    sys.exit(main())
