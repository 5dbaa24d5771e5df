"""Signed, time-limited bearer tokens.

A token is `django.core.signing` output: the JSON claim set plus an `exp`
timestamp, base64 encoded and HMAC signed with ``settings.TOKEN_SECRET``.
Validity is signature + expiry only; there is no server-side session or
revocation list.
"""

import time

from django.conf import settings
from django.core import signing

SALT = 'tmbackend.api.tokens'
CLAIM_KEYS = ('id', 'name', 'email')


def issue(claims, ttl=None):
    """Return a token carrying `claims` that expires after `ttl` (a timedelta)."""
    if ttl is None:
        ttl = settings.TOKEN_TTL
    payload = {key: claims[key] for key in CLAIM_KEYS}
    payload['exp'] = int(time.time() + ttl.total_seconds())
    return signing.dumps(payload, key=settings.TOKEN_SECRET, salt=SALT)


def verify(token):
    """Return the claims in `token`, or None when it is malformed, tampered or expired."""
    try:
        payload = signing.loads(token, key=settings.TOKEN_SECRET, salt=SALT)
    except signing.BadSignature:
        return None
    if not isinstance(payload, dict) or any(key not in payload for key in CLAIM_KEYS):
        return None
    expires = payload.get('exp')
    if not isinstance(expires, int) or expires <= time.time():
        return None
    return {key: payload[key] for key in CLAIM_KEYS}
