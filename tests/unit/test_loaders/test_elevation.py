import pytest
import requests
from unittest.mock import MagicMock, patch
from tenacity import wait_none

from core.models import Coordinates, SlopeAssessment, SourceStatus
from loaders.elevation import SLOPE_FALLBACK_NOTE, ElevationLoader, cross_points


@pytest.fixture
def mock_loader():
    with patch('requests.Session') as mock_session, \
         patch.object(ElevationLoader._make_request.retry, "wait", wait_none()):
        loader = ElevationLoader(timeout=1)
        loader.session = mock_session.return_value
        yield loader


def response(elevations):
    mock_response = MagicMock()
    mock_response.json.return_value = {"results": [{"elevation": e} for e in elevations]}
    return mock_response


def test_cross_points():
    points = cross_points(Coordinates(10.0, 20.0))
    assert points[0] == (10.0, 20.0)
    assert len(points) == 5
    assert points[1] == pytest.approx((10.01, 20.0))
    assert points[4] == pytest.approx((10.0, 19.99))


def test_endpoint_joins_points(mock_loader):
    endpoint = mock_loader.build_endpoint([(1.0, 2.0), (3.0, 4.0)])
    assert endpoint == "https://api.open-elevation.com/api/v1/lookup?locations=1.0,2.0|3.0,4.0"


def test_fetch_with_slope(mock_loader):
    """Verify the centre elevation and slope class from a five-point cross."""
    mock_loader.session.get.return_value = response([1660.4, 1700, 1650, 1660, 1655])

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.data.elevation_m == 1660
    assert result.data.slope_assessment is SlopeAssessment.GENTLE
    assert result.source.status is SourceStatus.SUCCESS


def test_single_point_fallback(mock_loader):
    """Verify a failed cross query degrades to a flat single-point result."""
    mock_loader.session.get.side_effect = [
        requests.Timeout("slow"), requests.Timeout("slow"), requests.Timeout("slow"),
        response([42.0]),
    ]

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.data.elevation_m == 42
    assert result.data.slope_assessment is SlopeAssessment.FLAT
    assert result.source.status is SourceStatus.FALLBACK
    assert result.source.error == SLOPE_FALLBACK_NOTE


def test_both_queries_fail(mock_loader):
    mock_loader.session.get.side_effect = requests.ConnectionError("down")

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.data is None
    assert result.source.status is SourceStatus.FAILED


def test_empty_results_use_fallback(mock_loader):
    mock_loader.session.get.side_effect = [response([]), response([12])]

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.source.status is SourceStatus.FALLBACK
    assert result.data.elevation_m == 12


def test_centre_elevation_rounds_half_up(mock_loader):
    mock_loader.session.get.return_value = response([500.5, 500, 500, 500, 500])

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.data.elevation_m == 501
    assert result.data.slope_assessment is SlopeAssessment.FLAT


def test_single_point_rounds_half_up(mock_loader):
    mock_loader.session.get.side_effect = [response([]), response([42.5])]

    result = mock_loader.fetch(Coordinates(-1.29, 36.82))
    assert result.data.elevation_m == 43
