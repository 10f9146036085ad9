"""
Geocoding client tests (HTTP calls are mocked).
"""

from unittest.mock import patch, MagicMock

import requests

from webapp.services.geocoding_service import geocode, search_places

PLACES = [
    {'display_name': "Rio de Janeiro, Brasil", 'lat': "-22.9068", 'lon': "-43.1729"},
    {'display_name': "Rio Branco, Acre, Brasil", 'lat': "-9.9747", 'lon': "-67.8243"},
]


def mock_response(data):
    resp = MagicMock()
    resp.json.return_value = data
    resp.raise_for_status.return_value = None
    return resp


@patch('webapp.services.geocoding_service.requests.get')
def test_search_places(mock_get):
    mock_get.return_value = mock_response(PLACES)

    suggestions = search_places("Rio")

    assert [s['display_name'] for s in suggestions] == ["Rio de Janeiro, Brasil", "Rio Branco, Acre, Brasil"]
    assert suggestions[0]['lat'] == -22.9068
    params = mock_get.call_args.kwargs['params']
    assert params == {'format': 'json', 'q': "Rio", 'limit': 5}
    assert 'User-Agent' in mock_get.call_args.kwargs['headers']


@patch('webapp.services.geocoding_service.requests.get')
def test_search_places_short_query(mock_get):
    assert search_places("Ri") == []
    assert search_places("  ") == []
    mock_get.assert_not_called()


@patch('webapp.services.geocoding_service.requests.get')
def test_search_places_soft_fails(mock_get):
    mock_get.side_effect = requests.ConnectionError("offline")

    assert search_places("Recife") == []


@patch('webapp.services.geocoding_service.requests.get')
def test_geocode(mock_get):
    mock_get.return_value = mock_response(PLACES)

    assert geocode("Rio de Janeiro") == (-22.9068, -43.1729)


@patch('webapp.services.geocoding_service.requests.get')
def test_geocode_no_results(mock_get):
    mock_get.return_value = mock_response([])

    assert geocode("Atlantis") is None


@patch('webapp.services.geocoding_service.requests.get')
def test_geocode_soft_fails(mock_get):
    mock_get.side_effect = requests.Timeout("slow")
    assert geocode("Recife") is None

    mock_get.side_effect = None
    mock_get.return_value = mock_response({'error': "bad request"})
    assert geocode("Recife") is None
