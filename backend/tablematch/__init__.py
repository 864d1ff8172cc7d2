"""TableMatch account and dining preferences backend."""

__version__ = "0.1.0"
