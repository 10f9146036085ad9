"""
Password Hashing

Salted one-way password hashes for stored user records.
"""

from werkzeug.security import generate_password_hash, check_password_hash


def hash_password(password):
    """
    Create a salted hash of a password for storage.

    Args:
        password (str): Plain-text password

    Returns:
        str: Hash string including method and salt
    """
    return generate_password_hash(password)


def verify_password(password_hash, password):
    """
    Check a plain-text password against a stored hash.

    Args:
        password_hash (str): Stored hash from hash_password()
        password (str): Candidate password

    Returns:
        bool: True if the password matches
    """
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)
