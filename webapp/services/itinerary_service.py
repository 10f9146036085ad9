"""
Itinerary Service

Builds mock itinerary cards for a destination and theme from a small fixed
dataset, and the map data for the results when the destination geocodes.
"""

import json
import time
import random
import logging
from urllib.parse import quote, urlencode

from config import settings
from webapp.services.geocoding_service import geocode

logger = logging.getLogger(__name__)

DEFAULT_THEME = 'nature'
ITINERARY_COUNT = 3
BASE_PRICE = 1500
PRICE_STEP = 300
MAP_ZOOM = 12
MARKER_JITTER = 0.05
TILE_URL = 'https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png'
TILE_ATTRIBUTION = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
PLACEHOLDER_IMAGE = 'https://placehold.co/800x600?text=EcoPilot'

DEFAULT_DATA = {
    'nature': {
        'titles': ["Ecoturismo na Mata Atlântica", "Expedição Amazônia Selvagem", "Paraíso no Cerrado"],
        'activities': ["Trilha das Cachoeiras", "Observação de Araras Azuis", "Banho de Rio Cristalino"],
        'accommodations': ["Pousada Recanto das Águas", "Eco-Lodge Toca do Tatu", "Refúgio da Serra"],
    },
    'culture': {
        'titles': ["Imersão no Pelourinho", "Rota do Ouro Colonial", "Tradições do Sertão"],
        'activities': ["Oficina de Capoeira", "Visita a Quilombos", "Degustação de Cachaça Artesanal"],
        'accommodations': ["Pousada Casarão Histórico", "Hostel Cultural Raízes", "Hotel Boutique Colonial"],
    },
    'gastronomy': {
        'titles': ["Sabores do Norte", "Rota do Vinho Gaúcho", "Delícias Mineiras"],
        'activities': ["Aula de Culinária Regional", "Colheita de Café Especial", "Jantar em Fazenda Histórica"],
        'accommodations': ["Pousada do Vinhedo", "Hotel Fazenda Café", "Estalagem Gastronômica"],
    },
    'relaxation': {
        'titles': ["Detox em Alto Paraíso", "Retiro na Chapada", "Spa Natural em Bonito"],
        'activities': ["Yoga ao Amanhecer", "Massagem com Pedras Quentes", "Banho de Argila Natural"],
        'accommodations': ["Resort Zen Chapada", "Bangalôs do Rio", "Santuário Ecológico Spa"],
    },
}

THEME_FIELDS = ('titles', 'activities', 'accommodations')


def _is_valid_dataset(data):
    """Each theme needs at least ITINERARY_COUNT entries per field."""
    if not isinstance(data, dict) or DEFAULT_THEME not in data:
        return False
    for theme_data in data.values():
        if not isinstance(theme_data, dict):
            return False
        for field in THEME_FIELDS:
            values = theme_data.get(field)
            if not isinstance(values, list) or len(values) < ITINERARY_COUNT:
                return False
    return True


def load_itinerary_data(path=None):
    """
    Load the itinerary dataset from a JSON file.

    Args:
        path (str or Path, optional): Dataset file, defaults to ECOTRIP_ITINERARY_DATA

    Returns:
        dict: Dataset keyed by theme; the built-in dataset if loading fails
    """
    path = path or settings.ITINERARY_DATA_PATH
    if not path:
        return DEFAULT_DATA

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not load itinerary data from {path}. Using built-in data. ({e})")
        return DEFAULT_DATA

    if not _is_valid_dataset(data):
        logger.warning(f"Itinerary data in {path} is incomplete. Using built-in data.")
        return DEFAULT_DATA

    logger.info(f"Itinerary data loaded from {path}")
    return data


def eco_score(index):
    """
    Get the eco-impact badge for an itinerary position.

    Args:
        index (int): Itinerary position (0, 1, 2)

    Returns:
        dict: Badge with 'label', 'class' and 'icon'
    """
    if index == 0:
        return {'label': "Alto Impacto Positivo", 'class': "high", 'icon': "🌿"}
    if index == 1:
        return {'label': "Médio Impacto", 'class': "medium", 'icon': "⚠️"}
    return {'label': "Baixo Impacto", 'class': "low", 'icon': "🛑"}


def accommodation_url(itinerary):
    """Build the accommodation details link for an itinerary card."""
    query = urlencode({
        'name': itinerary['accommodation'],
        'image': itinerary['accommodation_image'],
        'rating': itinerary['rating'],
        'location': itinerary['title'],
    }, quote_via=quote)
    return f"hospedagem.html?{query}"


class ItineraryPlanner:
    """
    Generates mock itineraries and map data.

    Args:
        data (dict, optional): Dataset keyed by theme, defaults to load_itinerary_data()
        geocoder (callable, optional): destination -> (lat, lon) or None
        delay (float, optional): Simulated processing time in seconds
        rng (random.Random, optional): Source for ratings and marker offsets
    """

    def __init__(self, data=None, geocoder=None, delay=None, rng=None):
        self.data = data if data is not None else load_itinerary_data()
        self.geocoder = geocoder or geocode
        self.delay = settings.ITINERARY_DELAY_SECONDS if delay is None else delay
        self.rng = rng or random.Random()

    @property
    def themes(self):
        return sorted(self.data)

    def generate_itineraries(self, destination, theme):
        """
        Build three itinerary cards for a destination.

        Unknown themes fall back to the nature theme.

        Returns:
            list: Itinerary dictionaries
        """
        theme_data = self.data.get(theme) or self.data[DEFAULT_THEME]
        destination_slug = quote(destination, safe='')
        theme_slug = quote(theme or DEFAULT_THEME, safe='')

        itineraries = []
        for i in range(ITINERARY_COUNT):
            itinerary = {
                'id': i,
                'title': f"{theme_data['titles'][i]} em {destination}",
                'duration': "5 Dias",
                'price': f"R$ {BASE_PRICE + i * PRICE_STEP}",
                'rating': f"{4.5 + self.rng.random() * 0.5:.1f}",
                'eco_score': eco_score(i),
                'accommodation': theme_data['accommodations'][i],
                'image': f"https://loremflickr.com/800/600/{destination_slug},Brazil,landscape/all?lock={i}",
                'accommodation_image': (
                    f"https://loremflickr.com/800/600/pousada,hotel,Brazil,{theme_slug}/all?lock={i + 10}"
                ),
                'fallback_image': PLACEHOLDER_IMAGE,
                'highlights': list(theme_data['activities'][:ITINERARY_COUNT]),
            }
            itinerary['details_url'] = accommodation_url(itinerary)
            itineraries.append(itinerary)
        return itineraries

    def build_map(self, lat, lon, itineraries):
        """
        Build map data centred on the destination with one marker per itinerary.

        Markers are offset randomly around the centre to simulate distinct locations.
        """
        markers = []
        for itinerary in itineraries:
            offset_lat = (self.rng.random() - 0.5) * MARKER_JITTER
            offset_lon = (self.rng.random() - 0.5) * MARKER_JITTER
            markers.append({
                'lat': lat + offset_lat,
                'lon': lon + offset_lon,
                'title': itinerary['title'],
                'accommodation': itinerary['accommodation'],
            })

        return {
            'center': [lat, lon],
            'zoom': MAP_ZOOM,
            'tile_url': TILE_URL,
            'attribution': TILE_ATTRIBUTION,
            'markers': markers,
        }

    def plan_trip(self, destination, theme, dates=None):
        """
        Plan a trip: geocode the destination, generate itineraries and map data.

        Generation always runs; the map is None when the destination cannot be geocoded.

        Returns:
            dict: Plan with 'itineraries' and 'map'
        """
        coordinates = self.geocoder(destination)

        if self.delay > 0:
            time.sleep(self.delay)

        itineraries = self.generate_itineraries(destination, theme)
        trip_map = self.build_map(coordinates[0], coordinates[1], itineraries) if coordinates else None

        logger.info(f"Generated {len(itineraries)} itineraries for '{destination}' ({theme})")
        return {
            'destination': destination,
            'dates': dates,
            'theme': theme if theme in self.data else DEFAULT_THEME,
            'itineraries': itineraries,
            'map': trip_map,
        }
