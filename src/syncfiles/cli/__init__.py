"""syncfiles CLI — mirror a file or directory onto another path."""

from ._helpers import main  # noqa: F401 — entry point
