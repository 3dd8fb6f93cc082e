"""Coach-facing player evaluation entry and heatmap board."""

__version__ = "0.1.0"
