"""Move advice and board tracking for two-player colonization board game rounds."""

__version__ = "0.1.0"
