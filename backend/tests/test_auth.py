import base64

import bcrypt
import pytest
from fastapi import APIRouter, Depends, Request
from fastapi.testclient import TestClient

from products_api.api import deps_auth
from products_api.api.deps_auth import INVALID_CREDENTIALS, require_credentials
from products_api.models.user import User
from conftest import PASSWORD, USERNAME, basic_auth


@pytest.fixture
def calls():
    return []


@pytest.fixture
def guarded_client(app, calls):
    """App with an extra guarded echo route that records every invocation."""
    echo = APIRouter(dependencies=[Depends(require_credentials)])

    @echo.post("/echo")
    async def echo_body(request: Request):
        body = await request.body()
        calls.append(body)
        return {"body": body.decode("utf-8")}

    app.include_router(echo, prefix="/test")
    return TestClient(app)


def _raw(header_value) -> dict:
    return {"Authorization": header_value}


def _token(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def test_valid_credentials_invoke_handler_once(guarded_client, calls):
    body = '{"name": "ABC", "manufacturer": "ACME"}'
    response = guarded_client.post("/test/echo", content=body, headers=basic_auth(USERNAME, PASSWORD))

    assert response.status_code == 200
    assert response.json() == {"body": body}
    assert calls == [body.encode("utf-8")]


@pytest.mark.parametrize(
    "headers",
    [
        {},
        _raw(""),
        _raw("Basic"),
        _raw("Basic !!!not-base64!!!"),
        _raw("Basic " + _token(b"no-separator")),
        _raw("Basic " + _token(b"\xff\xfe:x")),
        _raw(b"Basic \xe9\xe9\xe9\xe9"),
        _raw("Bearer " + _token(f"{USERNAME}:{PASSWORD}".encode("utf-8"))),
        _raw("Basic " + "A" * 10000),
        basic_auth(USERNAME, "wrong"),
        basic_auth("nobody", PASSWORD),
        basic_auth("", ""),
    ],
    ids=[
        "missing",
        "empty",
        "no-payload",
        "bad-base64",
        "no-colon",
        "not-ascii-payload",
        "non-ascii-header",
        "other-scheme",
        "oversized",
        "wrong-password",
        "unknown-user",
        "blank",
    ],
)
def test_invalid_credentials_are_rejected(guarded_client, calls, headers):
    response = guarded_client.post("/test/echo", content="{}", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"error": INVALID_CREDENTIALS}
    assert response.headers["www-authenticate"] == "Basic"
    assert calls == []


def test_unknown_user_and_wrong_password_look_identical(client):
    a = client.get("/api/products/list", headers=basic_auth(USERNAME, "nope"))
    b = client.get("/api/products/list", headers=basic_auth("ghost", PASSWORD))

    assert a.status_code == b.status_code == 401
    assert a.json() == b.json()


def test_unknown_user_still_runs_a_hash_check(client, monkeypatch):
    dummy_calls = []
    monkeypatch.setattr(deps_auth, "dummy_verify", lambda: dummy_calls.append(1))

    client.get("/api/products/list", headers=basic_auth("ghost", PASSWORD))
    client.get("/api/products/list", headers=basic_auth(USERNAME, PASSWORD))

    assert dummy_calls == [1]


@pytest.mark.parametrize("prefix", ["$2b$", "$2a$"])
def test_bcrypt_row_written_elsewhere_authenticates(client, db, prefix):
    # rows written by other services: bcrypt over password + salt, no passlib involved
    hashed = bcrypt.hashpw(b"pw" + b"s4lt", bcrypt.gensalt()).decode("ascii")
    hashed = prefix + hashed[4:]
    db.add(User(username="legacy", salted_password_hash=hashed, salt="s4lt"))
    db.commit()

    ok = client.get("/api/products/list", headers=basic_auth("legacy", "pw"))
    bad = client.get("/api/products/list", headers=basic_auth("legacy", "pw2"))

    assert ok.status_code == 200
    assert bad.status_code == 401


def test_pbkdf2_row_still_authenticates(client, db):
    from passlib.hash import pbkdf2_sha256

    db.add(User(username="older", salted_password_hash=pbkdf2_sha256.hash("pw" + "salt"), salt="salt"))
    db.commit()

    response = client.get("/api/products/list", headers=basic_auth("older", "pw"))

    assert response.status_code == 200


def test_password_may_contain_colons(client, db):
    from products_api.core.seed import create_user

    create_user(db, "colon", "a:b:c")
    response = client.get("/api/products/list", headers=basic_auth("colon", "a:b:c"))

    assert response.status_code == 200


def test_scheme_word_is_case_insensitive(client):
    token = _token(f"{USERNAME}:{PASSWORD}".encode("utf-8"))
    response = client.get("/api/products/list", headers=_raw(f"basic {token}"))

    assert response.status_code == 200


def test_malformed_body_without_credentials_gets_401(client):
    response = client.post("/api/products/new", content="not json")

    assert response.status_code == 401
    assert response.json() == {"error": INVALID_CREDENTIALS}
