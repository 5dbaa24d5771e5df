from rest_framework import serializers

from tmbackend.api.models import Task, normalize_email


def _messages(message, *extra):
    """Use one message for every way a field can be missing or malformed."""
    return {key: message for key in ('required', 'null', 'blank', 'invalid', *extra)}


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=100,
        error_messages=dict(_messages('Name is required'), max_length='Name must be at most 100 characters'),
    )
    email = serializers.EmailField(max_length=255, error_messages=_messages('Valid email is required', 'max_length'))
    password = serializers.CharField(
        min_length=6,
        trim_whitespace=False,
        error_messages=_messages('Password must be at least 6 characters', 'min_length'),
    )

    def validate_email(self, value):
        return normalize_email(value)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages=_messages('Valid email is required'))
    password = serializers.CharField(trim_whitespace=False, error_messages=_messages('Password is required'))

    def validate_email(self, value):
        return normalize_email(value)


class TaskSerializer(serializers.ModelSerializer):
    """Validates task input and renders stored rows.

    With ``partial=True`` only the supplied fields are validated and
    written; the rest keep their stored values.
    """

    title = serializers.CharField(
        max_length=255,
        error_messages=dict(_messages('Title is required'), max_length='Title must be at most 255 characters'),
    )
    description = serializers.CharField(required=False, allow_blank=True)
    due_date = serializers.DateField(
        input_formats=['iso-8601'],
        error_messages=_messages('due_date must be YYYY-MM-DD', 'datetime'),
    )
    status = serializers.ChoiceField(
        choices=Task.STATUS_CHOICES,
        required=False,
        error_messages=_messages('Invalid status', 'invalid_choice'),
    )
    user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Task
        fields = ['id', 'user_id', 'title', 'description', 'due_date', 'status', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.partial:
            # An update may omit the title but not clear it.
            self.fields['title'].error_messages.update(null='Title cannot be empty', blank='Title cannot be empty')
