"""Payroll engine: data models, flat-rate regional tax calculators, a WSGI API and a server command."""

__version__ = "0.1.0"

__all__ = ["api", "cli", "engine", "models", "tax"]