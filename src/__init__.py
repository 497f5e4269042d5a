"""Quick Actions — viewer quick action resolution."""

__version__ = "0.1.0"
