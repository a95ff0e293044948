# tests/services/test_personnes_api.py
from __future__ import annotations

from datetime import date
from typing import Any, Dict

from carnet.common.settings import get_settings

BASE = "/api/personnes"


def _create(api_client, **overrides) -> Dict[str, Any]:
    body = {"last_name": "dupont", "first_name": "MARIE", "phone": "06 12 34 56 78", "birth_date": "1990-01-01"}
    body.update(overrides)
    r = api_client.post(BASE, json=body)
    assert r.status_code == 201, r.text
    return r.json()


def test_healthz(api_client):
    r = api_client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_personnes_crud_flow(api_client):
    # Create
    p = _create(api_client)
    assert p["last_name"] == "DUPONT"
    assert p["first_name"] == "Marie"
    assert p["phone"] == "0612345678"
    pid = p["id"]

    # Read
    r = api_client.get(f"{BASE}/{pid}")
    assert r.status_code == 200, r.text
    assert r.json() == p

    # Update (full replace)
    r = api_client.put(f"{BASE}/{pid}", json={"last_name": "durand", "first_name": "lucie", "address": " 2 av. Foch "})
    assert r.status_code == 200, r.text
    upd = r.json()
    assert upd["id"] == pid
    assert (upd["last_name"], upd["first_name"], upd["address"], upd["phone"]) == ("DURAND", "Lucie", "2 av. Foch", None)

    # List
    r = api_client.get(BASE)
    assert r.status_code == 200, r.text
    assert [x["id"] for x in r.json()] == [pid]

    # Delete
    r = api_client.delete(f"{BASE}/{pid}")
    assert r.status_code == 204, r.text

    r = api_client.get(f"{BASE}/{pid}")
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


def test_list_with_filters_uses_search(api_client):
    _create(api_client)
    _create(api_client, last_name="Dupuis", first_name="jean", phone="0799999999")
    _create(api_client, last_name="martin", first_name="paul", phone=None)

    r = api_client.get(BASE, params={"last_name": "DUP"})
    assert [x["last_name"] for x in r.json()] == ["DUPONT", "DUPUIS"]

    r = api_client.get(BASE, params={"last_name": "dup", "phone": "0799"})
    assert [x["first_name"] for x in r.json()] == ["Jean"]


def test_error_statuses(api_client):
    existing = _create(api_client)

    r = api_client.post(BASE, json={"last_name": "x", "first_name": "y", "phone": "0612345678"})
    assert r.status_code == 409
    assert r.json()["code"] == "DUPLICATE_PHONE"

    r = api_client.post(BASE, json={"last_name": "x", "first_name": "y", "birth_date": "2999-01-01"})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_BIRTH_DATE"

    r = api_client.post(BASE, json={"last_name": "x", "first_name": "y", "birth_date": date.today().isoformat()})
    assert r.status_code == 400
    assert r.json()["code"] == "TOO_YOUNG"

    r = api_client.put(f"{BASE}/{existing['id']}", json={"last_name": "  ", "first_name": "y"})
    assert r.status_code == 400
    assert r.json()["code"] == "INVALID_INPUT"

    for method in ("get", "delete"):
        r = getattr(api_client, method)(f"{BASE}/999999")
        assert r.status_code == 404, method
    r = api_client.put(f"{BASE}/999999", json={"last_name": "x", "first_name": "y"})
    assert r.status_code == 404


def test_reset_restarts_ids(api_client):
    _create(api_client)
    _create(api_client, phone="0700000000")

    r = api_client.post(f"{BASE}/reset")
    assert r.status_code == 204, r.text
    assert api_client.get(BASE).json() == []

    assert _create(api_client)["id"] == 1


def test_reset_can_be_disabled(api_client, monkeypatch):
    monkeypatch.setattr(get_settings().features, "reset_enabled", False)
    _create(api_client)

    r = api_client.post(f"{BASE}/reset")
    assert r.status_code == 403
    assert r.json()["code"] == "RESET_DISABLED"
    assert len(api_client.get(BASE).json()) == 1


def test_over_long_phone_is_a_client_error(api_client):
    r = api_client.post(BASE, json={"last_name": "x", "first_name": "y", "phone": "0" * 40})
    assert r.status_code == 400, r.text
    assert r.json()["code"] == "INVALID_INPUT"


def test_id_zero_is_not_found(api_client):
    assert api_client.get(f"{BASE}/0").status_code == 404
    assert api_client.delete(f"{BASE}/0").status_code == 404
    r = api_client.put(f"{BASE}/0", json={"last_name": "x", "first_name": "y"})
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"
