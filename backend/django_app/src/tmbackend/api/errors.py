"""Error responses shared by views and middleware.

Each helper builds the response for one failure kind. Handlers return
them directly; only `internal_error` is produced for faults nobody handled.
"""

from django.http import JsonResponse


def validation_error(errors):
    """400 with field -> [messages] for every field that failed."""
    return JsonResponse({"errors": errors}, status=400)


def bad_request(message):
    return JsonResponse({"message": message}, status=400)


def unauthenticated(message='Token invalid or expired'):
    return JsonResponse({"message": message}, status=401)


def invalid_credentials():
    # Same body for unknown email and wrong password.
    return JsonResponse({"message": "Invalid credentials"}, status=401)


def conflict(message):
    return JsonResponse({"message": message}, status=400)


def not_found(message='Route not found'):
    return JsonResponse({"message": message}, status=404)


def internal_error():
    return JsonResponse({"message": "Internal server error"}, status=500)
