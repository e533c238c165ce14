"""Validator signing-status grid renderer."""

__version__ = "0.1.0"
