"""Epitech norm style checker for C sources."""

__version__ = "0.1.0"
