from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'premium'

router = DefaultRouter()
router.register(r'codes', views.ActivationCodeViewSet, basename='activation-code')

urlpatterns = [
    # User endpoints
    path('activate/', views.activate, name='activate'),
    path('status/', views.premium_status, name='status'),
    path('quota/', views.quota, name='quota'),
    path('lockout/', views.activation_lockout, name='lockout'),

    # Admin: activation codes
    # GET    /api/premium/codes/                 - List codes
    # GET    /api/premium/codes/{code}/          - Code details
    # POST   /api/premium/codes/generate/        - Generate a batch
    # POST   /api/premium/codes/{code}/sell/     - Mark as sold
    # POST   /api/premium/codes/{code}/revoke/   - Revoke
    # GET    /api/premium/codes/stats/           - Counts per status
    # GET    /api/premium/codes/export/          - CSV export
    path('', include(router.urls)),
]
