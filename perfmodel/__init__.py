"""Data model for sampled performance profiles: symbols, cost tables, call trees, events and flame graph layout."""

__version__ = "0.1.0"