"""Job alert feed for the Swedish data/BI market."""

__version__ = "0.1.0"
