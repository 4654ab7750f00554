from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .models import Group
from .serializers import (
    GroupSerializer,
    GroupWriteSerializer,
    AmountDueSerializer,
    PaymentSettingsSerializer,
)
from .permissions import IsGroupAdminOrReadOnly

from apps.groups.services import (
    create_group,
    update_group,
    delete_group,
    get_active_group,
    fine_breakdown,
    get_payment_settings,
    update_payment_settings,
    # Exceptions
    GroupNotFoundError,
    GroupAlreadyExistsError,
    InvalidFineRuleError,
    PaymentSettingsError,
)


class GroupViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the contribution group.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Get groups (a single active group in practice)
    create: Create the group (admin only)
    retrieve: Get a specific group
    update: Update a group and replace its fine rules (admin only)
    partial_update: Partially update a group (admin only)
    destroy: Delete the group and its members (admin only)
    """

    queryset = Group.objects.prefetch_related('fine_rules')
    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated, IsGroupAdminOrReadOnly]

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return GroupWriteSerializer
        return GroupSerializer

    def create(self, request, *args, **kwargs):
        """Create the group."""
        serializer = GroupWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            group = create_group(**serializer.to_service_kwargs())
        except (GroupAlreadyExistsError, InvalidFineRuleError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(GroupSerializer(group).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update group details."""
        partial = kwargs.pop('partial', False)
        serializer = GroupWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            group = update_group(group_id=self.kwargs['pk'], **serializer.to_service_kwargs())
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidFineRuleError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(GroupSerializer(group).data)

    def destroy(self, request, *args, **kwargs):
        """Delete the group."""
        try:
            delete_group(group_id=self.kwargs['pk'])
        except GroupNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(responses={200: AmountDueSerializer})
    @action(detail=True, methods=['get'])
    def amount_due(self, request, pk=None):
        """Today's contribution amount including fines."""
        group = self.get_object()
        today = timezone.localdate()
        breakdown = fine_breakdown(group, today)
        return Response(AmountDueSerializer({'date': today, **breakdown}).data)


@extend_schema(
    responses={200: AmountDueSerializer},
    description="Today's amount due for the active group (tiered default when no group exists).",
    tags=['groups'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_amount_due(request):
    """Amount due today for the active group."""
    today = timezone.localdate()
    breakdown = fine_breakdown(get_active_group(), today)
    return Response(AmountDueSerializer({'date': today, **breakdown}).data)


@extend_schema(
    request=PaymentSettingsSerializer,
    responses={200: PaymentSettingsSerializer},
    description="Read (any member) or replace (admin) the payment settings.",
    tags=['groups'],
)
@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated, IsGroupAdminOrReadOnly])
def payment_settings(request):
    """Get or update gateway/UPI settings."""
    if request.method == 'GET':
        return Response(PaymentSettingsSerializer(get_payment_settings()).data)

    serializer = PaymentSettingsSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        settings_row = update_payment_settings(
            gateway_enabled=serializer.validated_data['gateway_enabled'],
            upi_id=serializer.validated_data.get('upi_id', ''),
        )
    except PaymentSettingsError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(PaymentSettingsSerializer(settings_row).data)
