from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'quotes'

router = DefaultRouter()
router.register(r'', views.QuoteViewSet, basename='quote')

urlpatterns = [
    # GET    /api/quotes/                        - List quotes
    # POST   /api/quotes/                        - Create a quote
    # GET    /api/quotes/{id}/                   - Quote details
    # PUT    /api/quotes/{id}/                   - Update a quote
    # DELETE /api/quotes/{id}/                   - Delete a quote
    # POST   /api/quotes/{id}/duplicate/         - Copy as new draft
    # POST   /api/quotes/{id}/status/            - Change status
    # GET    /api/quotes/{id}/pdf/               - Download PDF
    # POST   /api/quotes/{id}/share/email/       - Email the PDF
    # GET    /api/quotes/{id}/share/whatsapp/    - WhatsApp share link
    # GET    /api/quotes/next-number/            - Next quote number
    # GET    /api/quotes/stats/                  - Dashboard figures
    path('', include(router.urls)),
]
