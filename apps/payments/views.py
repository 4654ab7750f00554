from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.http import HttpResponse
from django.utils import timezone
from drf_spectacular.utils import extend_schema, OpenApiTypes

from apps.accounts.permissions import IsStaff, PasswordChangeRequired
from apps.notifications.services import NotificationService, PaymentEmailSender
from .models import PaymentRequest
from .permissions import IsOwnerOrAdmin
from .serializers import (
    PaymentRequestSerializer,
    PaymentRequestListSerializer,
    PaymentRequestFilterSerializer,
    PaymentSubmitSerializer,
    DecisionSerializer,
    PaymentStatusSerializer,
    PaymentStatusFilterSerializer,
    UPIQRFilterSerializer,
)
from .services import (
    submit_payment_request,
    accept_payment_request,
    reject_payment_request,
    get_payment_status,
    delete_payment_request,
    encode_screenshot,
    validate_screenshot_data_url,
    build_upi_uri,
    generate_upi_qr,
    # Exceptions
    PaymentsServiceError,
    PaymentRequestNotFoundError,
    InsufficientPermissionsError,
    UPIUnavailableError,
)


class PaymentRequestPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class PaymentRequestViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet
):
    """
    Payment requests.

    list: Own requests (admins see all; filter by status, month)
    create: Submit a payment with a screenshot
    retrieve: One request including the screenshot
    destroy: Delete a request (admin only, ledger untouched)
    """

    queryset = PaymentRequest.objects.select_related('user', 'decided_by')
    serializer_class = PaymentRequestSerializer
    permission_classes = [IsAuthenticated, PasswordChangeRequired, IsOwnerOrAdmin]
    pagination_class = PaymentRequestPagination
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_permissions(self):
        """Admin-only actions."""
        if self.action in ['destroy', 'accept', 'reject']:
            return [IsAuthenticated(), IsStaff()]
        return super().get_permissions()

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user

        if not user.is_staff:
            queryset = queryset.filter(user=user)

        if self.action != 'list':
            return queryset

        filter_serializer = PaymentRequestFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'month' in params:
            queryset = queryset.filter(month=params['month'])

        return queryset.order_by('-created_at')

    def get_serializer_class(self):
        if self.action == 'list':
            return PaymentRequestListSerializer
        if self.action == 'create':
            return PaymentSubmitSerializer
        return PaymentRequestSerializer

    def _notifier(self):
        return NotificationService(email_sender=PaymentEmailSender())

    @extend_schema(request=PaymentSubmitSerializer, responses={201: PaymentRequestSerializer})
    def create(self, request, *args, **kwargs):
        """
        Submit a payment.

        POST /api/payments/
        JSON: {"screenshot": "data:image/png;base64,...", "month": "2024-05", "amount": "1200"}
        Multipart: same fields with screenshot as a file
        """
        upload = request.FILES.get('screenshot')
        payload = {key: value for key, value in request.data.items() if key != 'screenshot'}
        if upload is None:
            payload['screenshot'] = request.data.get('screenshot', '')

        serializer = PaymentSubmitSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            if upload is not None:
                screenshot = encode_screenshot(upload)
            elif data.get('screenshot'):
                screenshot = validate_screenshot_data_url(data['screenshot'])
            else:
                screenshot = ''

            payment_request = submit_payment_request(
                member=request.user,
                screenshot=screenshot,
                month=data.get('month'),
                amount=data.get('amount'),
                upi_id=data.get('upiId'),
                notifier=self._notifier(),
                today=timezone.localdate(),
            )
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            PaymentRequestSerializer(payment_request).data,
            status=status.HTTP_201_CREATED
        )

    def destroy(self, request, *args, **kwargs):
        """DELETE /api/payments/{id}/"""
        try:
            delete_payment_request(request_id=self.kwargs['pk'], deleted_by=request.user)
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _decide(self, decide, **kwargs):
        try:
            payment_request = decide(
                request_id=self.kwargs['pk'],
                decided_by=self.request.user,
                notifier=self._notifier(),
                **kwargs
            )
        except PaymentRequestNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except PaymentsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(PaymentRequestSerializer(payment_request).data)

    @extend_schema(request=None, responses={200: PaymentRequestSerializer})
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        """
        Accept a pending payment and mark the month paid.

        POST /api/payments/{id}/accept/
        """
        return self._decide(accept_payment_request)

    @extend_schema(request=DecisionSerializer, responses={200: PaymentRequestSerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """
        Reject a pending payment.

        POST /api/payments/{id}/reject/
        Body: {"reason": "optional"}
        """
        serializer = DecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._decide(reject_payment_request, reason=serializer.validated_data['reason'])

    @extend_schema(parameters=[PaymentStatusFilterSerializer], responses={200: PaymentStatusSerializer})
    @action(detail=False, methods=['get'], url_path='status')
    def payment_status(self, request):
        """
        Payment state for a month (current month by default).

        GET /api/payments/status/?month=2024-05
        """
        filter_serializer = PaymentStatusFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        payment_status = get_payment_status(
            member=request.user,
            month=filter_serializer.validated_data.get('month'),
            today=timezone.localdate(),
        )
        try:
            payment_status['upi_uri'] = build_upi_uri(
                payment_status['upi_id'], payment_status['amount']
            )
        except UPIUnavailableError:
            payment_status['upi_uri'] = None

        return Response(PaymentStatusSerializer(payment_status).data)

    @extend_schema(parameters=[UPIQRFilterSerializer], responses={(200, 'image/png'): OpenApiTypes.BINARY})
    @action(detail=False, methods=['get'])
    def upi_qr(self, request):
        """
        PNG QR code for paying the configured UPI ID.

        GET /api/payments/upi_qr/?amount=1200
        """
        filter_serializer = UPIQRFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        payment_status = get_payment_status(member=request.user, today=timezone.localdate())
        amount = filter_serializer.validated_data.get('amount', payment_status['amount'])

        try:
            png = generate_upi_qr(payment_status['upi_id'], amount)
        except UPIUnavailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return HttpResponse(png, content_type='image/png')
