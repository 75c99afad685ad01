"""Allow running MediaVault with ``python -m mediavault``."""

from mediavault.main import main

main()
