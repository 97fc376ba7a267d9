"""Declarative output and file checks for package test specifications."""

__version__ = "0.1.0"
__all__ = ["checks"]