"""Change feed for the quick-start stats: any write to a counted table pings watchers."""
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from accounts.models import Profile
from academics.models import Course, Department
from onduty.models import ODRequest
from .stats import STATS_GROUP

WATCHED = (Profile, Department, Course, ODRequest)


def notify_watchers() -> None:
    layer = get_channel_layer()
    if layer is None:
        return
    async_to_sync(layer.group_send)(STATS_GROUP, {"type": "stats_changed"})


@receiver(post_save)
@receiver(post_delete)
def on_watched_change(sender, **kwargs):
    if sender in WATCHED:
        transaction.on_commit(notify_watchers)
