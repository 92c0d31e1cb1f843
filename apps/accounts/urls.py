from django.urls import path
from . import views

app_name = 'users'

urlpatterns = [
    # Authentication
    path('register/', views.register, name='register'),
    path('login/', views.login, name='login'),
    path('logout/', views.logout, name='logout'),

    # Current user
    path('user/', views.get_current_user, name='current-user'),
    path('user/update/', views.update_user, name='update-user'),
    path('user/delete/', views.delete_account, name='delete-account'),
    path('is-admin/', views.is_admin, name='is-admin'),

    # Email verification
    path('verify-email/', views.verify_email, name='verify-email'),

    # Password reset
    path('password-reset/', views.request_password_reset, name='password-reset'),
    path('password-reset/confirm/', views.confirm_password_reset, name='password-reset-confirm'),
]
