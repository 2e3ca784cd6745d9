"""gitstock: GitHub activity priced as a stock."""

__version__ = "0.1.0"
