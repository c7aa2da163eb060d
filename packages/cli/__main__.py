"""Allow running the CLI with: python -m packages.cli"""

from .main import cli

if __name__ == "__main__":
    cli()
