# backend/django_app/tests/test_front_door.py

import logging
from datetime import timedelta

import pytest
from django.http import JsonResponse
from django.test import Client, RequestFactory

from tmbackend.api import tokens, views
from tmbackend.api.middleware import BearerTokenMiddleware, token_required

pytestmark = pytest.mark.django_db


def test_health(client):
    resp = client.get('/api/health')

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_unknown_route_is_json_404(client):
    resp = client.get('/api/nope')

    assert resp.status_code == 404
    assert resp.json() == {"message": "Route not found"}


def test_missing_authorization_header(client):
    resp = client.get('/api/tasks')

    assert resp.status_code == 401
    assert resp.json() == {"message": "Missing Authorization header"}


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer ", "bearer abc"])
def test_wrong_authorization_scheme(client, header):
    resp = client.get('/api/tasks', HTTP_AUTHORIZATION=header)

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid Authorization header format"}


def test_expired_token_rejected(client, alice):
    token = tokens.issue(alice.claims(), ttl=timedelta(seconds=-1))

    resp = client.get('/api/tasks', HTTP_AUTHORIZATION=f"Bearer {token}")

    assert resp.status_code == 401
    assert resp.json() == {"message": "Token invalid or expired"}


def test_tampered_token_rejected(client, alice):
    token = tokens.issue(alice.claims())
    tampered = token[:-1] + ('A' if token[-1] != 'A' else 'B')

    resp = client.delete('/api/tasks/1', HTTP_AUTHORIZATION=f"Bearer {tampered}")

    assert resp.status_code == 401


def test_gate_attaches_issued_claims():
    claims = {"id": 3, "name": "Carol", "email": "carol@example.com"}
    request = RequestFactory().get('/api/tasks', HTTP_AUTHORIZATION=f"Bearer {tokens.issue(claims)}")
    gate = BearerTokenMiddleware(lambda r: JsonResponse({}))

    @token_required
    def view(request):
        return JsonResponse({})

    assert gate.process_view(request, view, (), {}) is None
    assert request.claims == claims


def test_gate_ignores_unmarked_views():
    request = RequestFactory().get('/api/health')
    gate = BearerTokenMiddleware(lambda r: JsonResponse({}))

    assert gate.process_view(request, views.health, (), {}) is None


def test_malformed_json_body(client, alice, bearer):
    resp = client.post('/api/tasks', '{"title": ', content_type='application/json', **bearer(alice))

    assert resp.status_code == 400
    assert resp.json() == {"message": "Malformed JSON body"}


def test_non_object_body_is_a_validation_error(post_json):
    resp = post_json('/api/auth/login', ["alice@example.com"])

    assert resp.status_code == 400
    assert "errors" in resp.json()


def test_unhandled_error_is_generic_500(client, alice, bearer, monkeypatch, caplog):
    def boom(*args, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(views, "TaskSerializer", boom)

    with caplog.at_level(logging.ERROR, logger="tmbackend.api"):
        resp = client.get('/api/tasks', **bearer(alice))

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}
    assert "database exploded" not in resp.content.decode()
    assert "Unhandled error on GET /api/tasks" in caplog.text


def test_request_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="tmbackend.request"):
        client.get('/api/health')

    assert "GET /api/health 200" in caplog.text


def test_cors_preflight(client, settings):
    settings.CORS_ALLOWED_ORIGINS = ['http://localhost:5173']

    resp = client.options(
        '/api/tasks',
        HTTP_ORIGIN='http://localhost:5173',
        HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
        HTTP_ACCESS_CONTROL_REQUEST_HEADERS='authorization,content-type',
    )

    assert resp.status_code == 200
    assert resp['Access-Control-Allow-Origin'] == 'http://localhost:5173'
    assert 'authorization' in resp['Access-Control-Allow-Headers']


def test_cors_rejects_other_origins(client, settings):
    settings.CORS_ALLOWED_ORIGINS = ['http://localhost:5173']

    resp = client.get('/api/health', HTTP_ORIGIN='http://evil.example')

    assert 'Access-Control-Allow-Origin' not in resp


def test_error_raised_inside_middleware_is_logged_and_generic(alice, bearer, monkeypatch, caplog):
    def broken_verify(token):
        raise RuntimeError("signing backend down")

    monkeypatch.setattr(tokens, "verify", broken_verify)
    client = Client(raise_request_exception=False)

    with caplog.at_level(logging.ERROR, logger="django.request"):
        resp = client.get('/api/tasks', **bearer(alice))

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}
    assert "signing backend down" not in resp.content.decode()
    assert "Internal Server Error: /api/tasks" in caplog.text
    assert "signing backend down" in caplog.text
