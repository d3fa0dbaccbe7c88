"""Module entrypoint for ``python -m lazyscroll``."""

from .cli import main


if __name__ == "__main__":
    main()
