"""
LandQuote - geographic-aware estimation engine for land clearing quotes.

This package turns a property location, acreage, service package and a set
of site risk signals into a priced, time-boxed, confidence-scored quote.
"""

__version__ = "0.1.0"
