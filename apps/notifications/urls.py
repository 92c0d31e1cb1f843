from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # GET/PUT/PATCH /api/notifications/preferences/
    path('preferences/', views.preferences, name='preferences'),
]
