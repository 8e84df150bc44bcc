"""Financial analytics for church tithe and offering records."""

__version__ = "0.1.0"
