"""Module entrypoint for `python -m geolearn.cli`."""

from geolearn.cli.main import run

if __name__ == "__main__":
    run()
