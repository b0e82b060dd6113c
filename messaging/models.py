"""Course chat messages."""
from __future__ import annotations

from django.conf import settings
from django.db import models

MAX_MESSAGE_LENGTH = 500


def room_group(course_id: int) -> str:
    """Channels group carrying one course's chat."""
    return f"chat_course_{course_id}"


class ChatMessage(models.Model):
    course = models.ForeignKey("academics.Course", on_delete=models.CASCADE, related_name="chat_messages")
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="chat_messages")
    message_text = models.CharField(max_length=MAX_MESSAGE_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.course_id}:{self.sender_id}:{self.message_text[:16]}"

    def as_payload(self) -> dict:
        profile = getattr(self.sender, "profile", None)
        name = profile.display_name if profile else self.sender.get_username()
        return {
            "id": self.pk,
            "course": self.course_id,
            "sender_id": self.sender_id,
            "sender": name,
            "message": self.message_text,
            "created_at": self.created_at.isoformat(),
        }
