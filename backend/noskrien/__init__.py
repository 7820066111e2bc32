"""Noskrien race history: name reconciliation and head-to-head comparison."""

__version__ = "0.1.0"
