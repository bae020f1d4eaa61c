"""gendocs — command-line client for hosted gendocs documentation sites."""

__version__ = "0.1.0"
