"""taskgate: task use cases behind a pluggable authorization check."""

__version__ = "0.1.0"
