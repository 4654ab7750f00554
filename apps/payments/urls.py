from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'', views.PaymentRequestViewSet, basename='payment-request')

urlpatterns = [
    # GET    /api/payments/               - List payment requests
    # POST   /api/payments/               - Submit a payment (JSON or multipart)
    # GET    /api/payments/{id}/          - Payment request with screenshot
    # DELETE /api/payments/{id}/          - Delete (admin)
    # POST   /api/payments/{id}/accept/   - Accept (admin)
    # POST   /api/payments/{id}/reject/   - Reject (admin)
    # GET    /api/payments/status/        - Current member's payment state
    # GET    /api/payments/upi_qr/        - UPI QR code (PNG)
    path('', include(router.urls)),
]
