"""Автоматический триаж Pull Request для GitHub Actions."""

__version__ = "1.0.0"
