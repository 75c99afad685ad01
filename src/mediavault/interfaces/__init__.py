"""User-facing interfaces for MediaVault."""
