"""Simulated limit order book with traders, P&L tracking and a command-line simulation."""

__version__ = "0.1.0"
__all__ = ["order_book", "trading", "cli"]