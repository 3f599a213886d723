"""Concrete adapters for the interfaces in ``coverscout.interfaces``."""
