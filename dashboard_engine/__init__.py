"""Econ Dashboard — FRED / Yahoo Finance proxy engine."""

__version__ = "1.0.0"
