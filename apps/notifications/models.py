from django.db import models
from django.conf import settings
import uuid


class NotificationType(models.TextChoices):
    PAYMENT_SUBMITTED = 'payment_submitted', 'Payment submitted'
    PAYMENT_APPROVED = 'payment_approved', 'Payment approved'
    PAYMENT_REJECTED = 'payment_rejected', 'Payment rejected'
    GENERAL = 'general', 'General'


class Notification(models.Model):
    """In-app notification for a member or admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    username = models.CharField(max_length=150)

    type = models.CharField(
        max_length=32,
        choices=NotificationType.choices,
        default=NotificationType.GENERAL
    )
    title = models.CharField(max_length=200)
    message = models.TextField()
    read = models.BooleanField(default=False)
    data = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'read']),
            models.Index(fields=['recipient', 'created_at']),
        ]

    def __str__(self):
        return f"{self.username}: {self.title}"
