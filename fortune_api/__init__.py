"""HTTP front-end over the local fortune database."""

__version__ = "1.0.0"
