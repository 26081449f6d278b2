"""Delivery scheduling rule engine: cart delay, cutoffs, dates, slots and checkout."""

__version__ = "0.1.0"
