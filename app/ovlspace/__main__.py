"""Allow running as ``python -m ovlspace``."""

from ovlspace.cli.main import app

if __name__ == "__main__":
    app(prog_name="overlay-space-manager")
