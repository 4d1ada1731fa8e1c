"""Allow ``python -m src``."""
from .cli import main

if __name__ == "__main__":
    main()
