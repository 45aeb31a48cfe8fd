"""
services - Outbound integrations used by the API layer.
"""

from services.geolocator import (          # noqa: F401
    GeolocatorError,
    GeolocatorHTTPError,
    GeolocatorLocation,
    GeolocatorResponse,
    GeolocatorUpstreamError,
    NoResultsError,
    NominatimGeolocator,
    get_geolocator,
)
