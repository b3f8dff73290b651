# cyrlat/__main__.py
import sys
from .cli import app


def cli(argv=None):
    """
    Launcher so you can run:
      - python3 -m cyrlat rename /music --dry-run
      - python3 -m cyrlat name "2001 - Тень"
    """
    return app(args=argv, prog_name="cyrlat")


if __name__ == "__main__":
    sys.exit(cli())
