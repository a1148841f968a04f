"""tempdrop: ephemeral file drop with per-upload expiration."""

__version__ = "0.1.0"
