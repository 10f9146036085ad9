"""
Geocoding Service

Place autocomplete and forward geocoding against the OpenStreetMap Nominatim
search API. Every call soft-fails: errors are logged and an empty result is
returned so trip planning can continue without a map.
"""

import logging
import requests

from config import settings

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
SUGGESTION_LIMIT = 5


def _search(query, limit=None):
    """Run a Nominatim search and return the decoded JSON list."""
    params = {'format': 'json', 'q': query}
    if limit is not None:
        params['limit'] = limit

    resp = requests.get(
        settings.NOMINATIM_URL,
        params=params,
        headers={'User-Agent': settings.GEOCODING_USER_AGENT},
        timeout=settings.GEOCODING_TIMEOUT,
    )
    resp.raise_for_status()
    data = resp.json()
    if not isinstance(data, list):
        raise ValueError(f"Unexpected geocoding response: {type(data).__name__}")
    return data


def search_places(query, limit=SUGGESTION_LIMIT):
    """
    Get autocomplete suggestions for a destination query.

    Args:
        query (str): Partial destination text
        limit (int): Maximum number of suggestions

    Returns:
        list: Suggestions as {'display_name', 'lat', 'lon'} dictionaries
    """
    query = (query or '').strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    try:
        places = _search(query, limit=limit)
    except Exception as e:
        logger.error(f"Error fetching suggestions for '{query}': {e}")
        return []

    suggestions = []
    for place in places:
        try:
            suggestions.append({
                'display_name': place['display_name'],
                'lat': float(place['lat']),
                'lon': float(place['lon']),
            })
        except (KeyError, TypeError, ValueError):
            continue
    return suggestions


def geocode(destination):
    """
    Get coordinates for a destination.

    Args:
        destination (str): Destination name

    Returns:
        tuple or None: (lat, lon) of the first match, None if not found or unavailable
    """
    try:
        places = _search(destination)
    except Exception as e:
        logger.warning(f"Geocoding service unavailable. Proceeding without map update. ({e})")
        return None

    if not places:
        logger.warning(f"Coordinates not found for '{destination}'. Proceeding without map update.")
        return None

    try:
        return float(places[0]['lat']), float(places[0]['lon'])
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Malformed geocoding result for '{destination}': {e}")
        return None
