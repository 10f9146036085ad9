"""
Configuration Management

Loads application settings from environment variables (and an optional .env file).
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"

# Storage
DATABASE_URL = os.getenv("ECOTRIP_DATABASE_URL", f"sqlite:///{DATA_DIR / 'ecotrip.db'}")
BACKUP_DIR = Path(os.getenv("ECOTRIP_BACKUP_DIR", str(BASE_DIR / "backups")))

# Web app
SECRET_KEY = os.getenv("ECOTRIP_SECRET_KEY", "dev-secret-key-change-in-production")
SESSION_KEY = os.getenv("ECOTRIP_SESSION_KEY", "ecotrip_session")

# Geocoding (OpenStreetMap Nominatim)
NOMINATIM_URL = os.getenv("ECOTRIP_NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
GEOCODING_TIMEOUT = int(os.getenv("ECOTRIP_GEOCODING_TIMEOUT", "10"))
GEOCODING_USER_AGENT = os.getenv("ECOTRIP_GEOCODING_USER_AGENT", "EcoTripPlanner/1.0 (demo)")

# Itinerary generation
ITINERARY_DATA_PATH = os.getenv("ECOTRIP_ITINERARY_DATA")
ITINERARY_DELAY_SECONDS = float(os.getenv("ECOTRIP_ITINERARY_DELAY", "1.5"))

LOG_LEVEL = os.getenv("ECOTRIP_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
