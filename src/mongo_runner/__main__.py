"""Main entry point for ``python -m mongo_runner``."""

from mongo_runner.cli.main import main


if __name__ == "__main__":
    main()
