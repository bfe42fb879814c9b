"""The 2048 sliding-tile puzzle with themes, merge effects and an auto-player."""

__version__ = "1.1.0"