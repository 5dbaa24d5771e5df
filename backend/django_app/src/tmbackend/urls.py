from django.urls import path, re_path
from tmbackend.api import views as api

urlpatterns = [
    # Health (accept with and without trailing slash)
    path('api/health', api.health),
    path('api/health/', api.health),

    # Auth endpoints
    path('api/auth/register', api.register),
    path('api/auth/register/', api.register),
    path('api/auth/login', api.login_view),
    path('api/auth/login/', api.login_view),

    # Tasks collection and detail
    path('api/tasks', api.tasks),
    path('api/tasks/', api.tasks),
    path('api/tasks/<str:task_id>', api.task_detail),
    path('api/tasks/<str:task_id>/', api.task_detail),

    # Anything else
    re_path(r'^', api.not_found),
]

handler500 = 'tmbackend.api.views.server_error'
