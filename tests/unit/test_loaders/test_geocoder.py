import pytest
import requests
from unittest.mock import MagicMock, patch
from tenacity import wait_none

from core.models import Coordinates, SourceStatus
from loaders.geocoder import Geocoder, detect_coastal, parse_location


@pytest.fixture
def mock_geocoder():
    with patch('requests.Session') as mock_session, \
         patch.object(Geocoder._make_request.retry, "wait", wait_none()):
        geocoder = Geocoder(timeout=1, min_interval=0)
        geocoder.session = mock_session.return_value
        yield geocoder


def test_reverse_geocode_success(mock_geocoder):
    mock_response = MagicMock()
    mock_response.json.return_value = {
        "display_name": "Nairobi, Kenya",
        "address": {"country": "Kenya", "country_code": "KE", "state": "Nairobi County"},
    }
    mock_geocoder.session.get.return_value = mock_response

    result = mock_geocoder.fetch(Coordinates(-1.29, 36.82))
    assert result.data.display_name == "Nairobi, Kenya"
    assert result.data.country_code == "ke"
    assert result.data.region == "Nairobi County"
    assert result.data.is_coastal is False
    assert result.source.status is SourceStatus.SUCCESS

    _, kwargs = mock_geocoder.session.get.call_args
    assert kwargs["params"]["zoom"] == 10
    assert kwargs["params"]["format"] == "json"


def test_parse_defaults():
    location = parse_location({}, Coordinates(1.5, 2.5))
    assert location.display_name == "1.5, 2.5"
    assert location.country == "Unknown"
    assert location.country_code == "xx"
    assert location.region == "Unknown"


def test_region_falls_back_to_county():
    location = parse_location({"address": {"county": "Kilifi"}}, Coordinates(1, 2))
    assert location.region == "Kilifi"


@pytest.mark.parametrize("address,place_type,expected", [
    ({"natural": "coastline"}, None, True),
    ({"water": "Bay of Bengal"}, None, True),
    ({"country": "Kenya"}, "sea", True),
    ({"country": "Kenya"}, "city", False),
    ({}, "ocean", False),
])
def test_detect_coastal(address, place_type, expected):
    assert detect_coastal(address, place_type) is expected


def test_reverse_geocode_failure(mock_geocoder):
    mock_geocoder.session.get.side_effect = requests.HTTPError("429 Too Many Requests")

    result = mock_geocoder.fetch(Coordinates(-1.29, 36.82))
    assert result.data is None
    assert result.source.status is SourceStatus.FAILED
    assert result.source.source == "nominatim"
