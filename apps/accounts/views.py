from rest_framework import status, viewsets, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .models import User
from .permissions import IsStaff
from .serializers import (
    UserSerializer,
    UserLoginSerializer,
    MemberWriteSerializer,
    PasswordChangeSerializer,
)
from .services import (
    authenticate_member,
    change_password as change_member_password,
    create_member,
    update_member,
    delete_member,
    AccountsServiceError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
)
from apps.groups.services import get_active_group, get_group_by_id, GroupNotFoundError


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with username and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with username and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_member(
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    request=PasswordChangeSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Change password. Required before a new member can use the API.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def change_password(request):
    """Change the current member's password."""
    serializer = PasswordChangeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = change_member_password(
            user=request.user,
            new_password=serializer.validated_data['new_password'],
            confirm_password=serializer.validated_data['confirm_password'],
        )
    except AccountsServiceError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(UserSerializer(user).data)


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated member's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated member profile."""
    return Response(UserSerializer(request.user).data)


class MemberViewSet(viewsets.ModelViewSet):
    """
    Member management for admins.

    list: All members (filter with ?group=<id>)
    create: Create a member and their first contribution record
    retrieve: Get a member
    update / partial_update: Change name, username, email or password
    destroy: Delete a member
    """

    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsStaff]

    def get_queryset(self):
        queryset = User.objects.filter(is_staff=False).select_related('group')
        group_id = self.request.query_params.get('group')
        if group_id:
            queryset = queryset.filter(group_id=group_id)
        return queryset

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return MemberWriteSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):
        """Create a member in the given or active group."""
        serializer = MemberWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if 'groupId' in data:
            try:
                group = get_group_by_id(group_id=data['groupId'])
            except GroupNotFoundError as e:
                return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        else:
            group = get_active_group()
            if group is None:
                return Response(
                    {'error': 'Create a group first'},
                    status=status.HTTP_400_BAD_REQUEST
                )

        try:
            member = create_member(
                group=group,
                name=data['name'],
                username=data['username'],
                password=data.get('password', ''),
                email=data.get('email', ''),
            )
        except AccountsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UserSerializer(member).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        """Update member details."""
        partial = kwargs.pop('partial', False)
        serializer = MemberWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            member = update_member(
                member_id=self.kwargs['pk'],
                name=data.get('name'),
                username=data.get('username'),
                password=data.get('password') or None,
                email=data.get('email'),
            )
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except AccountsServiceError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(UserSerializer(member).data)

    def destroy(self, request, *args, **kwargs):
        """Delete a member."""
        try:
            delete_member(member_id=self.kwargs['pk'])
        except UserNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
