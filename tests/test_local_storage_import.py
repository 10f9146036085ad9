"""
Legacy browser storage import tests.
"""

import json
from datetime import datetime

import pytest

from utils.local_storage import (
    decode_legacy_password,
    import_legacy_users,
    load_local_storage_export,
)
from webapp.services.auth_service import AuthService

LEGACY_USERS = [
    {
        'id': "1700000000000",
        'name': "Ana",
        'email': "ana@x.com",
        'password': "cHcx",  # pw1
        'isPremium': True,
        'subscriptionDate': "2024-02-01T10:00:00.000Z",
        'createdAt': "2024-01-01T09:30:00.250Z",
    },
    {
        'id': "1700000000001",
        'name': "Bia",
        'email': "bia@x.com",
        'password': "c2VuaGE=",  # senha
        'isPremium': False,
        'subscriptionDate': None,
        'createdAt': "2024-01-02T09:30:00.000Z",
    },
]


def test_decode_legacy_password():
    assert decode_legacy_password("cHcx") == "pw1"

    with pytest.raises(ValueError):
        decode_legacy_password("not base64!!")


def test_import_legacy_users(db):
    counts = import_legacy_users(db, LEGACY_USERS)

    assert counts == {'imported': 2, 'skipped': 0, 'invalid': 0}

    ana = db.find_user_by_email("ana@x.com")
    assert ana['user_id'] == "1700000000000"
    assert ana['is_premium'] is True
    assert ana['subscription_date'] == datetime(2024, 2, 1, 10, 0, 0)
    assert ana['created_at'] == datetime(2024, 1, 1, 9, 30, 0, 250000)
    assert ana['password_hash'] != "cHcx"

    service = AuthService(db)
    assert service.login("ana@x.com", "pw1")['success'] is True
    assert service.login("bia@x.com", "senha")['success'] is True


def test_import_skips_existing_and_invalid(db):
    import_legacy_users(db, LEGACY_USERS[:1])

    counts = import_legacy_users(db, LEGACY_USERS + [
        {'email': "broken@x.com", 'password': "not base64!!"},
        {'name': "No Email", 'password': "cHcx"},
        {'email': "baddate@x.com", 'password': "cHcx", 'createdAt': "yesterday"},
        "not an object",
    ])

    assert counts == {'imported': 1, 'skipped': 1, 'invalid': 4}
    assert db.count_users() == 2


def test_load_export_shapes(tmp_path):
    plain = tmp_path / "plain.json"
    plain.write_text(json.dumps(LEGACY_USERS), encoding='utf-8')
    assert load_local_storage_export(plain) == LEGACY_USERS

    keyed = tmp_path / "keyed.json"
    keyed.write_text(json.dumps({'ecotrip_users': LEGACY_USERS}), encoding='utf-8')
    assert load_local_storage_export(keyed) == LEGACY_USERS

    # localStorage values are strings holding JSON
    raw = tmp_path / "raw.json"
    raw.write_text(json.dumps({'ecotrip_users': json.dumps(LEGACY_USERS)}), encoding='utf-8')
    assert load_local_storage_export(raw) == LEGACY_USERS

    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({'ecotrip_users': 42}), encoding='utf-8')
    with pytest.raises(ValueError):
        load_local_storage_export(bad)
