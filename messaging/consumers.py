from __future__ import annotations

import time

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from academics.models import Course
from accounts.session import SessionKind, resolve_session
from .models import MAX_MESSAGE_LENGTH, ChatMessage, room_group

RATE_LIMIT_MESSAGES = 5
RATE_LIMIT_WINDOW = 5.0


@database_sync_to_async
def _room_access(user, course_id: int) -> tuple[bool, Course | None]:
    """Any signed-in user whose role resolves may join an existing course room."""
    if resolve_session(user).kind is not SessionKind.AUTHORIZED:
        return False, None
    course = Course.objects.filter(pk=course_id).first()
    return course is not None, course


@database_sync_to_async
def _persist_message(course: Course, sender, text: str) -> ChatMessage:
    return ChatMessage.objects.create(course=course, sender=sender, message_text=text[:MAX_MESSAGE_LENGTH])


class CourseChatConsumer(AsyncJsonWebsocketConsumer):
    """One room per course; persisted messages are fanned out by `messaging.signals`."""

    async def connect(self):
        self.course_id = int(self.scope["url_route"]["kwargs"]["course_id"])
        self.room_name = None
        ok, course = await _room_access(self.scope.get("user"), self.course_id)
        if not ok:
            await self.close(code=4001)
            return
        self.course = course
        self.room_name = room_group(self.course_id)
        # Per-connection rate limiter: max 5 messages per 5 seconds
        self._rate_ts: list[float] = []
        await self.channel_layer.group_add(self.room_name, self.channel_name)
        await self.accept()

    def _within_rate(self) -> bool:
        now = time.monotonic()
        self._rate_ts = [t for t in self._rate_ts if now - t < RATE_LIMIT_WINDOW]
        if len(self._rate_ts) >= RATE_LIMIT_MESSAGES:
            return False
        self._rate_ts.append(now)
        return True

    async def receive_json(self, content, **kwargs):
        if not isinstance(content, dict) or not isinstance(content.get("message"), str):
            return
        msg = content["message"].strip()
        if not msg:
            return
        if not self._within_rate():
            # Dropped silently
            return
        await _persist_message(self.course, self.scope.get("user"), msg)

    async def chat_message(self, event):
        await self.send_json(event["payload"])

    async def disconnect(self, code):
        if self.room_name:
            await self.channel_layer.group_discard(self.room_name, self.channel_name)
