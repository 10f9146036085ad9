"""
Utility modules for the EcoTrip planner.
"""

from .timestamps import utc_now, new_user_id, to_iso, from_iso
from .security import hash_password, verify_password

__all__ = ['utc_now', 'new_user_id', 'to_iso', 'from_iso', 'hash_password', 'verify_password']
