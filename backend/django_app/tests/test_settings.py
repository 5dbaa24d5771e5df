# backend/django_app/tests/test_settings.py

from datetime import timedelta

import pytest
from django.core.exceptions import ImproperlyConfigured

from tmbackend.settings import _parse_ttl


@pytest.mark.parametrize("value, expected", [
    ("3600", timedelta(hours=1)),
    ("90s", timedelta(seconds=90)),
    ("15m", timedelta(minutes=15)),
    ("12h", timedelta(hours=12)),
    ("1d", timedelta(days=1)),
    (" 2D ", timedelta(days=2)),
])
def test_parse_ttl(value, expected):
    assert _parse_ttl(value) == expected


@pytest.mark.parametrize("value", ["", "d", "1w", "-5m", "1.5h", "²", "²h"])
def test_parse_ttl_rejects_garbage(value):
    with pytest.raises(ImproperlyConfigured):
        _parse_ttl(value)
