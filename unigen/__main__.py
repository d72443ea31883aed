"""Allow ``python -m unigen``."""

from .cli import run

run()
