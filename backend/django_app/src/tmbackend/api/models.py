from django.contrib.auth.hashers import check_password, make_password
from django.db import models


def normalize_email(email):
    return (email or '').strip().lower()


class UserManager(models.Manager):
    def get_by_email(self, email):
        return self.filter(email=normalize_email(email)).first()

    def email_in_use(self, email):
        return self.filter(email=normalize_email(email)).exists()

    def create_user(self, name, email, password):
        return self.create(
            name=name,
            email=normalize_email(email),
            password=make_password(password),
        )


class User(models.Model):
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=255, unique=True)
    password = models.CharField(max_length=255)  # salted hash, never the raw value
    created_at = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    class Meta:
        db_table = 'users'

    def check_password(self, raw_password):
        return check_password(raw_password, self.password)

    def claims(self):
        return {"id": self.id, "name": self.name, "email": self.email}


class TaskQuerySet(models.QuerySet):
    def owned_by(self, user_id):
        return self.filter(user_id=user_id).order_by('due_date', '-id')


class Task(models.Model):
    PENDING = 'Pending'
    COMPLETED = 'Completed'
    STATUS_CHOICES = [(PENDING, 'Pending'), (COMPLETED, 'Completed')]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='tasks')
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    due_date = models.DateField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        db_table = 'tasks'
