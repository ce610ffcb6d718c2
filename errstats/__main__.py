"""Allow ``python -m errstats``."""

from errstats.main import main

if __name__ == "__main__":
    raise SystemExit(main())
