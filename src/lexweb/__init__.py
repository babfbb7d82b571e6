"""Front ends for lexcore: the Flask app (web.py) and the command line (__main__.py)."""
from .web import create_app

__all__ = ["create_app"]
