from apps.notifications.streams import Feed


def _contribution_snapshot(user_id):
    from apps.contributions.models import Contribution
    return list(Contribution.objects.filter(user_id=user_id).order_by('-month'))


# Publishes a member's full contribution list after every committed ledger change.
contribution_feed = Feed('contributions', _contribution_snapshot)
