"""
services.geolocator - Free-text address lookup against a geocoding API.

One synchronous GET per query; the JSON body is reshaped into
GeolocatorLocation objects.  Every failure (transport, HTTP status,
provider error, empty result) raises a GeolocatorError subclass, so
callers treat "no results" and "request failed" the same way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

import config

logger = logging.getLogger(__name__)

USER_AGENT = "contactdb/1.0"

# Upstream location key → GeolocatorLocation attribute
LOCATION_FIELDS = {
    "street":     "street",
    "postalCode": "code",
    "adminArea5": "town",
    "adminArea1": "country",
}


class GeolocatorError(Exception):
    """Base class for every geolocator failure."""


class GeolocatorHTTPError(GeolocatorError):
    """Transport failure or non-200 response; status_code is None for the former."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GeolocatorUpstreamError(GeolocatorError):
    """The provider answered 200 but reported a non-zero status code."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class NoResultsError(GeolocatorError):
    """The provider found nothing for the query."""


@dataclass
class GeolocatorLocation:
    id: Optional[int] = None
    street: Optional[str] = None
    code: Optional[str] = None
    town: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    display_title: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "displayTitle": self.display_title,
            "street": self.street,
            "code": self.code,
            "town": self.town,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }


@dataclass
class GeolocatorResponse:
    locations: list[GeolocatorLocation] = field(default_factory=list)

    def add_location(self, location: GeolocatorLocation):
        self.locations.append(location)

    def to_dict(self) -> dict:
        return {"locations": [loc.to_dict() for loc in self.locations]}


class NominatimGeolocator:

    def __init__(
        self,
        base_url: str,
        key: str,
        client: Optional[requests.Session] = None,
        timeout: float = config.GEOLOCATOR_TIMEOUT,
    ):
        self.base_url = base_url
        self.key = key
        self.client = client or requests.Session()
        self.timeout = timeout

    def locate(self, query: str) -> GeolocatorResponse:
        try:
            response = self.client.get(
                self.base_url,
                params={
                    "location": query,
                    "format": "json",
                    "addressdetails": 1,
                    "key": self.key,
                },
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error(f"Geolocator request to {self.base_url} failed: {exc}")
            raise GeolocatorHTTPError(f"Request to {self.base_url} failed: {exc}") from exc

        if response.status_code != 200:
            raise GeolocatorHTTPError(
                f'Server at "{self.base_url}" returned HTTP "{response.status_code}"',
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise GeolocatorError(f"Invalid JSON from {self.base_url}: {exc}") from exc
        if not isinstance(body, dict):
            raise GeolocatorError(f"Unexpected response body from {self.base_url}")

        info = body.get("info", {})
        status = info.get("statuscode")
        if status != 0:
            messages = info.get("messages") or [f"status code {status}"]
            raise GeolocatorUpstreamError(messages[0], status_code=status)

        results = body.get("results") or []
        if not results:
            raise NoResultsError("No results found.")

        geo_response = GeolocatorResponse()
        for result in results:
            for location_id, location in enumerate(result.get("locations", [])):
                geo_response.add_location(self._to_location(location_id, location))
        if not geo_response.locations:
            raise NoResultsError("No results found.")
        return geo_response

    @staticmethod
    def _to_location(location_id: int, location: dict) -> GeolocatorLocation:
        geo = GeolocatorLocation(id=location_id)
        for key, attr in LOCATION_FIELDS.items():
            if location.get(key) is not None:
                setattr(geo, attr, location[key])

        lat_lng = location.get("latLng")
        if lat_lng:
            geo.latitude = lat_lng.get("lat")
            geo.longitude = lat_lng.get("lng")

        title = ", ".join(part or "" for part in (geo.street, geo.town, geo.country))
        geo.display_title = title.strip(", ")
        return geo


def get_geolocator() -> NominatimGeolocator:
    """Geolocator configured from config.GEOLOCATOR_*."""
    return NominatimGeolocator(config.GEOLOCATOR_URL, config.GEOLOCATOR_KEY)
