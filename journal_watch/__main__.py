"""Allow ``python -m journal_watch``."""

from .cli import main

if __name__ == "__main__":
    main()
