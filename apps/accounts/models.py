from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.db.models.functions import Lower
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for username-based authentication."""

    def get_by_natural_key(self, username):
        return self.get(username__iexact=username)

    def create_user(self, username, password=None, **extra_fields):
        if not username:
            raise ValueError('Username is required')

        username = username.strip()
        email = extra_fields.pop('email', '') or ''
        user = self.model(username=username, email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('must_change_password', False)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(username, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Group member. Admins are staff users.

    Usernames are unique regardless of case.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        related_name='members',
        null=True,
        blank=True
    )
    name = models.CharField(max_length=100, blank=True)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(max_length=255, blank=True)

    must_change_password = models.BooleanField(default=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'members'
        ordering = ['name', 'username']
        constraints = [
            models.UniqueConstraint(Lower('username'), name='unique_member_username_ci'),
        ]
        indexes = [
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return self.username

    def get_display_name(self):
        """Return name or username."""
        return self.name or self.username
