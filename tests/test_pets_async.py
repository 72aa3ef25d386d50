import pytest
from httpx import AsyncClient, ASGITransport
from slowapi import Limiter
from slowapi.util import get_remote_address

from petstore.config import get_settings
from petstore.main import app


@pytest.mark.asyncio
async def test_create_list_and_delete_all(client):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        for name in ("Luna", "Toby"):
            resp = await ac.post("/pets", json={"name": name, "species": "cat", "breed": "siamese"})
            assert resp.status_code == 200

        resp = await ac.get("/pets")
        assert resp.status_code == 200
        assert sorted(p["name"] for p in resp.json()) == ["Luna", "Toby"]

        resp = await ac.delete("/pets/all")
        assert resp.text == "Pets has been deleted!"
        resp = await ac.get("/pets")
        assert resp.json() == []


def test_writes_are_rate_limited(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "rate_limit_writes", "2/minute")
    app.state.limiter = Limiter(key_func=get_remote_address)

    body = {"name": "Rex", "species": "dog", "breed": "lab"}
    assert client.post("/pets", json=body).status_code == 200
    assert client.post("/pets", json=body).status_code == 200
    assert client.post("/pets", json=body).status_code == 429
    # las lecturas no cuentan
    assert client.get("/pets").status_code == 200


def test_empty_rate_limit_disables_limiting(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "rate_limit_writes", "")
    app.state.limiter = Limiter(key_func=get_remote_address)

    for _ in range(5):
        assert client.delete("/pets/x").status_code == 200


def test_default_settings_do_not_limit(client):
    app.state.limiter = Limiter(key_func=get_remote_address)

    body = {"name": "Rex", "species": "dog", "breed": "lab"}
    codes = [client.put("/pets/X", json=body).status_code for _ in range(61)]
    assert set(codes) == {200}


def test_limit_is_shared_across_ids(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "rate_limit_writes", "1/minute")
    app.state.limiter = Limiter(key_func=get_remote_address)

    assert client.delete("/pets/id0").status_code == 200
    assert client.delete("/pets/id1").status_code == 429
