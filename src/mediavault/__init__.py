"""MediaVault - a private, deduplicated collection of imported media."""

__version__ = "0.1.0"
