"""Allow ``python -m neuro_reader``."""

from neuro_reader.presentation.cli.app import app

app()
