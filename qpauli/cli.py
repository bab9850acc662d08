# qpauli/cli.py
from qpauli.__main__ import app as _typer_app
from qpauli.logging_config import setup_logging


def main():
    """Console script entrypoint for the qpauli CLI."""
    setup_logging()
    _typer_app()
