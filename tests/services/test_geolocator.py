from unittest.mock import Mock

import pytest
import requests

from services.geolocator import (
    GeolocatorError,
    GeolocatorHTTPError,
    GeolocatorUpstreamError,
    NoResultsError,
    NominatimGeolocator,
)

BASE_URL = "https://geo.example/geocoding/v1/address"


def _client(status_code=200, body=None, json_error=None):
    response = Mock(status_code=status_code)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    client = Mock()
    client.get.return_value = response
    return client


def _body(*locations, statuscode=0, messages=None):
    return {
        "info": {"statuscode": statuscode, "messages": messages or []},
        "results": [{"locations": list(locations)}] if locations else [],
    }


def test_locate_maps_locations():
    client = _client(body=_body(
        {"street": "Main St", "postalCode": "1010", "adminArea5": "Vienna",
         "adminArea1": "Austria", "latLng": {"lat": 48.2, "lng": 16.37}},
        {"street": None, "adminArea5": "Graz", "adminArea1": "Austria"},
    ))
    geolocator = NominatimGeolocator(BASE_URL, "secret", client=client, timeout=3)

    response = geolocator.locate("Main St Vienna")

    first, second = response.locations
    assert first.id == 0
    assert first.display_title == "Main St, Vienna, Austria"
    assert (first.street, first.code, first.town, first.country) == \
        ("Main St", "1010", "Vienna", "Austria")
    assert (first.latitude, first.longitude) == (48.2, 16.37)
    assert second.id == 1
    assert second.display_title == "Graz, Austria"
    assert second.latitude is None

    client.get.assert_called_once()
    args, kwargs = client.get.call_args
    assert args == (BASE_URL,)
    assert kwargs["params"] == {
        "location": "Main St Vienna", "format": "json", "addressdetails": 1, "key": "secret",
    }
    assert kwargs["timeout"] == 3


def test_to_dict_uses_wire_names():
    client = _client(body=_body({"street": "Main St", "adminArea5": "Vienna"}))
    data = NominatimGeolocator(BASE_URL, "k", client=client).locate("x").to_dict()

    assert data == {"locations": [{
        "id": 0, "displayTitle": "Main St, Vienna", "street": "Main St", "code": None,
        "town": "Vienna", "country": None, "latitude": None, "longitude": None,
    }]}


def test_no_results_raises():
    geolocator = NominatimGeolocator(BASE_URL, "k", client=_client(body=_body()))
    with pytest.raises(NoResultsError, match="No results found."):
        geolocator.locate("nowhere")


def test_http_status_raises():
    geolocator = NominatimGeolocator(BASE_URL, "k", client=_client(status_code=503))
    with pytest.raises(GeolocatorHTTPError) as excinfo:
        geolocator.locate("Vienna")
    assert excinfo.value.status_code == 503
    assert "503" in str(excinfo.value)


def test_upstream_status_raises():
    client = _client(body=_body(statuscode=403, messages=["The AppKey submitted is invalid"]))
    geolocator = NominatimGeolocator(BASE_URL, "bad", client=client)

    with pytest.raises(GeolocatorUpstreamError, match="AppKey") as excinfo:
        geolocator.locate("Vienna")
    assert excinfo.value.status_code == 403


def test_transport_failure_raises():
    client = Mock()
    client.get.side_effect = requests.ConnectionError("connection refused")
    geolocator = NominatimGeolocator(BASE_URL, "k", client=client)

    with pytest.raises(GeolocatorHTTPError) as excinfo:
        geolocator.locate("Vienna")
    assert excinfo.value.status_code is None


def test_invalid_json_raises():
    client = _client(json_error=ValueError("Expecting value"))
    with pytest.raises(GeolocatorError, match="Invalid JSON"):
        NominatimGeolocator(BASE_URL, "k", client=client).locate("Vienna")


def test_results_without_locations_raise():
    """A result entry with an empty locations list counts as no result."""
    client = _client(body={"info": {"statuscode": 0}, "results": [{"locations": []}]})
    geolocator = NominatimGeolocator(BASE_URL, "k", client=client)

    with pytest.raises(NoResultsError, match="No results found."):
        geolocator.locate("Unmatchable 999")
