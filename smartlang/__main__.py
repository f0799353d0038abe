"""Module entry-point for ``python -m smartlang``."""

from smartlang.cli import main

if __name__ == "__main__":
    main()
