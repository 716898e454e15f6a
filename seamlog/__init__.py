"""Log abstractions, an in-memory log backend, log routing and key-span utilities for a distributed database."""

__version__ = "0.1.0"