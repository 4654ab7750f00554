from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Member profile as returned after login and by /user/."""

    groupId = serializers.UUIDField(source='group_id', read_only=True, allow_null=True)
    mustChangePassword = serializers.BooleanField(source='must_change_password', read_only=True)
    isAdmin = serializers.BooleanField(source='is_staff', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'username',
            'name',
            'email',
            'groupId',
            'mustChangePassword',
            'isAdmin',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class MemberWriteSerializer(serializers.Serializer):
    """Input serializer for creating and updating members (admin)."""

    groupId = serializers.UUIDField(required=False)
    name = serializers.CharField(max_length=100)
    username = serializers.CharField(max_length=150)
    password = serializers.CharField(
        write_only=True,
        required=False,
        allow_blank=True,
        style={'input_type': 'password'}
    )
    email = serializers.EmailField(required=False, allow_blank=True)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for member login."""

    username = serializers.CharField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class PasswordChangeSerializer(serializers.Serializer):
    """Serializer for the first-login password change."""

    new_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )
    confirm_password = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )


class UserPublicSerializer(serializers.ModelSerializer):
    """Public member info (for ledger and payment listings)."""

    class Meta:
        model = User
        fields = ['id', 'username', 'name']
        read_only_fields = fields
