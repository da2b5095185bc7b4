"""CivicHub: community problem reporting with crowdsourced solutions."""

__version__ = "0.1.0"
