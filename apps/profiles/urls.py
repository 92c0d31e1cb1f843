from django.urls import path
from . import views

app_name = 'profiles'

urlpatterns = [
    # GET/POST/PUT/PATCH /api/profile/
    path('', views.my_profile, name='my-profile'),
]
