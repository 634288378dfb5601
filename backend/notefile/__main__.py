"""Entry point for `python -m notefile`."""

from notefile.main import run

if __name__ == "__main__":
    run()
