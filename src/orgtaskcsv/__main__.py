"""Allow ``python -m orgtaskcsv``."""

from orgtaskcsv.cli import main

if __name__ == "__main__":
    main()
