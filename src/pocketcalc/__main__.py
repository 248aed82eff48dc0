"""Allow ``python -m pocketcalc``."""

from pocketcalc.cli import main

if __name__ == "__main__":
    main()
