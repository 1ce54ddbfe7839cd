"""Module entrypoint for ``python -m tweenlist``."""

from .cli import main


if __name__ == "__main__":
    main()
