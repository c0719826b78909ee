"""copyrec — fixed-width copybook record codec."""

__version__ = "0.3.0"
