"""Aggregate commit history across an organization into manifest release notes."""

__version__ = "0.1.0"
