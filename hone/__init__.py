"""hone — a small AUR helper layered over pacman."""

__version__ = "0.1.0"
