"""Main entry point for the hash_tickler package."""
from hash_tickler.cli import main


if __name__ == "__main__":
    main()
