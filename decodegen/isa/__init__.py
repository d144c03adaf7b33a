"""Built-in instruction catalogs."""

from .avr import avr_catalog  # noqa: F401

CATALOGS = {"avr": avr_catalog}

__all__ = ["CATALOGS", "avr_catalog"]
