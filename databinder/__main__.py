"""Allow ``python -m databinder``."""

from .cli import main

if __name__ == "__main__":
    main()
