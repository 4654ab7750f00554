"""
Snapshot feeds for realtime listeners.

A Feed wraps a Django Signal. Subscribers register for one key (a member id)
and receive the complete current snapshot for that key every time it is
published, so handling the same delivery twice is harmless.

The project itself registers no subscribers: the REST API is polled.
contribution_feed and notification_feed are the extension point for
in-process consumers such as a websocket or server-sent events layer.
Publishing costs nothing while no one is subscribed.

Example::

    subscription = contribution_feed.subscribe(member.pk, render_rows)
    ...
    subscription.unsubscribe()
"""

import logging
import uuid

from django.db import transaction
from django.dispatch import Signal

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by Feed.subscribe()."""

    def __init__(self, feed, key, dispatch_uid):
        self.feed = feed
        self.key = key
        self.dispatch_uid = dispatch_uid
        self.active = True

    def unsubscribe(self):
        """Stop receiving snapshots. Safe to call more than once."""
        if self.active:
            self.feed.signal.disconnect(dispatch_uid=self.dispatch_uid)
            self.active = False


class Feed:
    """
    Publishes per-key snapshots to subscribers.

    Args:
        name: Feed name used in log messages
        snapshot: Callable taking a key and returning the current snapshot
    """

    def __init__(self, name, snapshot):
        self.name = name
        self.snapshot = snapshot
        self.signal = Signal()

    def subscribe(self, key, callback) -> Subscription:
        dispatch_uid = f'{self.name}:{key}:{uuid.uuid4().hex}'

        def receiver(sender, snapshot, **kwargs):
            if kwargs['key'] == key:
                callback(snapshot)

        self.signal.connect(receiver, weak=False, dispatch_uid=dispatch_uid)
        return Subscription(self, key, dispatch_uid)

    def publish(self, key):
        """
        Send the current snapshot for key to every subscriber.

        Listener errors are logged and never reach the publisher.
        Returns the snapshot, or None when nobody is listening.
        """
        if not self.signal.has_listeners():
            return None

        snapshot = self.snapshot(key)
        responses = self.signal.send_robust(sender=self.__class__, key=key, snapshot=snapshot)
        for receiver, response in responses:
            if isinstance(response, Exception):
                logger.error(
                    "Listener on %s feed failed for %s",
                    self.name, key,
                    exc_info=(type(response), response, response.__traceback__),
                )
        return snapshot

    def publish_on_commit(self, key):
        """Publish once the surrounding transaction commits."""
        transaction.on_commit(lambda: self.publish(key))


def _notification_snapshot(user_id):
    from apps.notifications.models import Notification
    return list(Notification.objects.filter(recipient_id=user_id).order_by('-created_at'))


notification_feed = Feed('notifications', _notification_snapshot)
