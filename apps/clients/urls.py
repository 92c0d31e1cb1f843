from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'clients'

router = DefaultRouter()
router.register(r'', views.ClientViewSet, basename='client')

urlpatterns = [
    # GET    /api/clients/          - List clients (?search=)
    # POST   /api/clients/          - Create client
    # GET    /api/clients/{id}/     - Client details
    # PUT    /api/clients/{id}/     - Update client
    # PATCH  /api/clients/{id}/     - Partial update
    # DELETE /api/clients/{id}/     - Delete client
    path('', include(router.urls)),
]
