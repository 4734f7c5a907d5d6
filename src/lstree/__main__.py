"""Allow running lstree with ``python -m lstree``."""

from lstree.cli.main import main

if __name__ == "__main__":
    main()
