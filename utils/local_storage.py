"""
Legacy Browser Storage Import

Converts a JSON export of the old browser-storage user list into database
records. The browser version kept passwords base64-encoded; they are decoded
once here and replaced by salted hashes.

Accepted export shapes:
    [ {user}, ... ]
    {"ecotrip_users": [ {user}, ... ]}
    {"ecotrip_users": "<JSON string of the list>"}
"""

import json
import base64
import binascii
import logging

from config.database import DuplicateEmailError
from utils.security import hash_password
from utils.timestamps import from_iso, new_user_id, utc_now

logger = logging.getLogger(__name__)

USERS_KEY = 'ecotrip_users'


def decode_legacy_password(encoded):
    """
    Decode a base64-encoded legacy password.

    Args:
        encoded (str): Base64 text as produced by the browser's btoa()

    Returns:
        str: Plain-text password

    Raises:
        ValueError: If encoded is not valid base64
    """
    try:
        # btoa() only accepts Latin-1 strings
        return base64.b64decode(encoded, validate=True).decode('latin-1')
    except (binascii.Error, TypeError) as e:
        raise ValueError("Invalid base64 password") from e


def load_local_storage_export(path):
    """
    Read the user list from a browser storage export file.

    Returns:
        list: Raw legacy user dictionaries
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get(USERS_KEY, [])
    if isinstance(data, str):
        data = json.loads(data)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of users in {path}")
    return data


def convert_legacy_user(legacy):
    """
    Convert one legacy user dictionary into a database record.

    Raises:
        ValueError: If required fields are missing or malformed
    """
    try:
        email = legacy['email']
        password = decode_legacy_password(legacy['password'])
    except KeyError as e:
        raise ValueError(f"Missing field {e}") from e

    if not email:
        raise ValueError("Empty email")

    is_premium = legacy.get('isPremium') is True
    return {
        'user_id': str(legacy.get('id') or new_user_id()),
        'name': legacy.get('name') or '',
        'email': email,
        'password_hash': hash_password(password),
        'is_premium': is_premium,
        'subscription_date': from_iso(legacy.get('subscriptionDate')) if is_premium else None,
        'created_at': from_iso(legacy.get('createdAt')) or utc_now(),
    }


def import_legacy_users(db, legacy_users):
    """
    Import legacy users into the database, skipping existing emails.

    Args:
        db (UserDatabase): Target database
        legacy_users (list): Raw legacy user dictionaries

    Returns:
        dict: Counts of 'imported', 'skipped' (duplicate) and 'invalid' records
    """
    counts = {'imported': 0, 'skipped': 0, 'invalid': 0}

    for index, legacy in enumerate(legacy_users):
        if not isinstance(legacy, dict):
            logger.warning(f"Record {index}: not an object - skipping")
            counts['invalid'] += 1
            continue

        try:
            record = convert_legacy_user(legacy)
        except ValueError as e:
            logger.warning(f"Record {index}: {e} - skipping")
            counts['invalid'] += 1
            continue

        try:
            db.save_user(record)
        except DuplicateEmailError:
            counts['skipped'] += 1
            continue

        counts['imported'] += 1

    logger.info(
        f"Import complete: {counts['imported']} imported, "
        f"{counts['skipped']} skipped, {counts['invalid']} invalid"
    )
    return counts
