"""Allow running pda as ``python -m pda``."""

from pda.cli.app import main

if __name__ == "__main__":
    main()
