import logging

from django.db import IntegrityError, transaction
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from tmbackend.api import errors, tokens
from tmbackend.api.middleware import token_required
from tmbackend.api.models import Task, User
from tmbackend.api.serializers import LoginSerializer, RegisterSerializer, TaskSerializer

logger = logging.getLogger(__name__)


@require_http_methods(["GET"])
def health(request):
    return JsonResponse({"ok": True})


@require_http_methods(["POST"])
def register(request):
    serializer = RegisterSerializer(data=request.json)
    if not serializer.is_valid():
        return errors.validation_error(serializer.errors)
    data = serializer.validated_data
    if User.objects.email_in_use(data['email']):
        return errors.conflict('Email already in use')
    try:
        # The unique index settles registrations that race past the check above.
        with transaction.atomic():
            user = User.objects.create_user(data['name'], data['email'], data['password'])
    except IntegrityError:
        return errors.conflict('Email already in use')
    logger.info('Registered user %s', user.id)
    return JsonResponse({"message": "User registered successfully"}, status=201)


@require_http_methods(["POST"])
def login_view(request):
    serializer = LoginSerializer(data=request.json)
    if not serializer.is_valid():
        return errors.validation_error(serializer.errors)
    data = serializer.validated_data
    user = User.objects.get_by_email(data['email'])
    if user is None or not user.check_password(data['password']):
        return errors.invalid_credentials()
    claims = user.claims()
    return JsonResponse({"token": tokens.issue(claims), "user": claims})


@token_required
@require_http_methods(["GET", "POST"])
def tasks(request):
    owner_id = request.claims['id']
    if request.method == 'GET':
        items = TaskSerializer(Task.objects.owned_by(owner_id), many=True).data
        return JsonResponse(items, safe=False)
    serializer = TaskSerializer(data=request.json)
    if not serializer.is_valid():
        return errors.validation_error(serializer.errors)
    serializer.save(user_id=owner_id)
    return JsonResponse(serializer.data, status=201)


@token_required
@require_http_methods(["PUT", "DELETE"])
def task_detail(request, task_id: str):
    owner_id = request.claims['id']
    serializer = None
    if request.method == 'PUT':
        serializer = TaskSerializer(data=request.json, partial=True)
        if not serializer.is_valid():
            return errors.validation_error(serializer.errors)
    if not (task_id.isascii() and task_id.isdigit()):
        return errors.bad_request('Invalid task id')
    pk = int(task_id)
    # Foreign tasks look exactly like missing ones.
    task = Task.objects.owned_by(owner_id).filter(pk=pk).first()
    if task is None:
        return errors.not_found('Task not found')
    if request.method == 'DELETE':
        task.delete()
        return JsonResponse({"message": "Task deleted"})
    serializer.instance = task
    serializer.save()
    return JsonResponse(serializer.data)


def not_found(request, *args, **kwargs):
    return errors.not_found()


def server_error(request, *args, **kwargs):
    return errors.internal_error()
