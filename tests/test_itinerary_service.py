"""
Itinerary generation tests.
"""

import json
import random

from webapp.services.itinerary_service import (
    DEFAULT_DATA,
    ItineraryPlanner,
    eco_score,
    load_itinerary_data,
)


def make_planner(geocoder=None):
    return ItineraryPlanner(
        data=DEFAULT_DATA,
        geocoder=geocoder or (lambda destination: None),
        delay=0,
        rng=random.Random(7),
    )


def test_generates_three_itineraries():
    itineraries = make_planner().generate_itineraries("Paraty", "culture")

    assert len(itineraries) == 3
    assert [it['id'] for it in itineraries] == [0, 1, 2]
    assert itineraries[0]['title'] == "Imersão no Pelourinho em Paraty"
    assert [it['price'] for it in itineraries] == ["R$ 1500", "R$ 1800", "R$ 2100"]
    assert [it['accommodation'] for it in itineraries] == DEFAULT_DATA['culture']['accommodations']
    for itinerary in itineraries:
        assert itinerary['duration'] == "5 Dias"
        assert itinerary['highlights'] == DEFAULT_DATA['culture']['activities']
        assert 4.5 <= float(itinerary['rating']) <= 5.0
        assert len(itinerary['rating'].split('.')[1]) == 1


def test_unknown_theme_falls_back_to_nature():
    itineraries = make_planner().generate_itineraries("Bonito", "nightlife")

    assert itineraries[0]['title'] == "Ecoturismo na Mata Atlântica em Bonito"


def test_image_urls_are_encoded():
    itinerary = make_planner().generate_itineraries("São Paulo", "nature")[1]

    assert itinerary['image'] == "https://loremflickr.com/800/600/S%C3%A3o%20Paulo,Brazil,landscape/all?lock=1"
    assert itinerary['accommodation_image'].endswith("pousada,hotel,Brazil,nature/all?lock=11")


def test_details_url():
    itinerary = make_planner().generate_itineraries("Rio", "nature")[0]

    url = itinerary['details_url']
    assert url.startswith("hospedagem.html?name=Pousada%20Recanto%20das%20%C3%81guas&image=")
    assert f"&rating={itinerary['rating']}&" in url
    assert url.endswith("&location=Ecoturismo%20na%20Mata%20Atl%C3%A2ntica%20em%20Rio")


def test_eco_score():
    assert eco_score(0)['class'] == "high"
    assert eco_score(1)['class'] == "medium"
    assert eco_score(2)['class'] == "low"


def test_plan_trip_without_coordinates():
    plan = make_planner().plan_trip("Lugar Nenhum", "gastronomy", "2026-01-10")

    assert plan['map'] is None
    assert plan['theme'] == "gastronomy"
    assert plan['dates'] == "2026-01-10"
    assert len(plan['itineraries']) == 3


def test_plan_trip_with_coordinates():
    plan = make_planner(lambda destination: (-15.0, -47.0)).plan_trip("Brasília", "relaxation")

    trip_map = plan['map']
    assert trip_map['center'] == [-15.0, -47.0]
    assert trip_map['zoom'] == 12
    assert len(trip_map['markers']) == 3
    for marker, itinerary in zip(trip_map['markers'], plan['itineraries']):
        assert abs(marker['lat'] + 15.0) <= 0.025
        assert abs(marker['lon'] + 47.0) <= 0.025
        assert marker['title'] == itinerary['title']


def test_plan_trip_reports_fallback_theme():
    plan = make_planner().plan_trip("Rio", "unknown")

    assert plan['theme'] == "nature"


def test_load_itinerary_data_default():
    assert load_itinerary_data(None) is DEFAULT_DATA


def test_load_itinerary_data_from_file(tmp_path):
    data = {
        'nature': {
            'titles': ["A", "B", "C"],
            'activities': ["x", "y", "z"],
            'accommodations': ["h1", "h2", "h3"],
        }
    }
    path = tmp_path / "database.json"
    path.write_text(json.dumps(data), encoding='utf-8')

    assert load_itinerary_data(path) == data


def test_load_itinerary_data_falls_back(tmp_path):
    assert load_itinerary_data(tmp_path / "missing.json") is DEFAULT_DATA

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding='utf-8')
    assert load_itinerary_data(broken) is DEFAULT_DATA

    incomplete = tmp_path / "incomplete.json"
    incomplete.write_text(json.dumps({'nature': {'titles': ["A"]}}), encoding='utf-8')
    assert load_itinerary_data(incomplete) is DEFAULT_DATA
