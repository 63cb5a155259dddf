"""Wallet service core: user, balance and transaction use cases with supporting infrastructure."""

__version__ = "0.1.0"