"""
Google Maps Platform integration.

Geocodes customer addresses and looks up drive times from the service base.
"""

from .client import GoogleMapsClient, GoogleMapsClientConfig
from .parser import GoogleMapsResponseParser

__all__ = ["GoogleMapsClient", "GoogleMapsClientConfig", "GoogleMapsResponseParser"]
