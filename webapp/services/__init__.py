"""
Services used by the web application: accounts, geocoding and itineraries.
"""
