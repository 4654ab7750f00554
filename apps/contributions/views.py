from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.utils import timezone
from drf_spectacular.utils import extend_schema

from apps.accounts.permissions import PasswordChangeRequired
from .models import Contribution
from .serializers import (
    ContributionSerializer,
    ContributionFilterSerializer,
    StatementSerializer,
    DashboardSerializer,
    ReceiptSerializer,
)
from .services import (
    get_member_statement,
    get_group_dashboard,
    build_receipt,
    ReceiptNotAvailableError,
)


class ContributionPagination(PageNumberPagination):
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ContributionViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Ledger records.

    Members see their own records, admins see everyone's.

    list: Records (filter by month, status, username)
    retrieve: One record
    """

    serializer_class = ContributionSerializer
    permission_classes = [IsAuthenticated, PasswordChangeRequired]
    pagination_class = ContributionPagination

    def get_queryset(self):
        user = self.request.user
        queryset = Contribution.objects.select_related('user', 'user__group')

        if not user.is_staff:
            queryset = queryset.filter(user=user)

        # Filters only apply to listings
        if self.action != 'list':
            return queryset

        filter_serializer = ContributionFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'month' in params:
            queryset = queryset.filter(month=params['month'])
        if 'status' in params:
            queryset = queryset.filter(status=params['status'])
        if 'username' in params and user.is_staff:
            queryset = queryset.filter(user__username__iexact=params['username'])

        return queryset.order_by('-month', 'user__username')

    @extend_schema(responses={200: StatementSerializer})
    @action(detail=False, methods=['get'])
    def statement(self, request):
        """
        The current member's dues, history and upcoming months.

        GET /api/contributions/statement/
        """
        statement = get_member_statement(member=request.user, today=timezone.localdate())
        return Response(StatementSerializer(statement).data)

    @extend_schema(responses={200: DashboardSerializer})
    @action(detail=False, methods=['get'])
    def dashboard(self, request):
        """
        Group totals by month and by member.

        GET /api/contributions/dashboard/
        """
        dashboard = get_group_dashboard(
            group=request.user.group,
            today=timezone.localdate(),
        )
        return Response(DashboardSerializer(dashboard).data)

    @extend_schema(responses={200: ReceiptSerializer})
    @action(detail=True, methods=['get'])
    def receipt(self, request, pk=None):
        """
        Receipt data for a paid month.

        GET /api/contributions/{id}/receipt/
        """
        contribution = self.get_object()
        try:
            receipt = build_receipt(contribution=contribution)
        except ReceiptNotAvailableError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReceiptSerializer(receipt).data)
