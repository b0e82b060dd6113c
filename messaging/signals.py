"""Change feed for chat: every committed message is pushed to its course room."""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import ChatMessage, room_group

logger = logging.getLogger(__name__)


def broadcast(message: ChatMessage) -> None:
    layer = get_channel_layer()
    if layer is None:
        return
    payload = {"type": "chat.message", **message.as_payload()}
    async_to_sync(layer.group_send)(room_group(message.course_id), {"type": "chat_message", "payload": payload})
    logger.debug("Broadcast chat message %s to course %s", message.pk, message.course_id)


@receiver(post_save, sender=ChatMessage)
def on_message_saved(sender, instance: ChatMessage, created: bool, **kwargs):
    if created:
        transaction.on_commit(lambda: broadcast(instance))
