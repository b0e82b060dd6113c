from __future__ import annotations

import pytest
from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import Client

from accounts.models import Profile, Role
from academics.models import Course, Department
from config.asgi import application
from messaging.models import MAX_MESSAGE_LENGTH, ChatMessage


@database_sync_to_async
def _setup():
    User = get_user_model()
    dept = Department.objects.create(name="Physics", code="ph")
    course = Course.objects.create(name="Optics", code="ph201", department=dept)
    teacher = User.objects.create_user(username="tws", email="tws@example.com", password="pw")
    Profile.objects.create(user=teacher, role=Role.TEACHER, first_name="Meena", department=dept)
    student = User.objects.create_user(username="sws", email="sws@example.com", password="pw")
    Profile.objects.create(user=student, role=Role.STUDENT, first_name="Arun", department=dept)
    stranger = User.objects.create_user(username="xws", email="xws@example.com", password="pw")
    return teacher, student, stranger, course.id


@database_sync_to_async
def _sessionid(user) -> str:
    c = Client()
    c.force_login(user)
    return c.cookies[settings.SESSION_COOKIE_NAME].value


async def _connect(course_id: int, sessionid: str | None = None):
    headers = [(b"cookie", f"{settings.SESSION_COOKIE_NAME}={sessionid}".encode())] if sessionid else []
    comm = WebsocketCommunicator(application, f"/ws/chat/course/{course_id}/", headers=headers)
    connected, code = await comm.connect()
    return connected, code, comm


@database_sync_to_async
def _messages(course_id: int) -> list[str]:
    return list(ChatMessage.objects.filter(course_id=course_id).order_by("id").values_list("message_text", flat=True))


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_room_rejects_anonymous_and_profileless_users():
    _, _, stranger, course_id = await _setup()

    ok, code, comm = await _connect(course_id)
    assert not ok and code == 4001
    await comm.disconnect()

    ok, code, comm = await _connect(course_id, await _sessionid(stranger))
    assert not ok and code == 4001
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_unknown_course_is_rejected():
    teacher, _, _, course_id = await _setup()
    ok, code, comm = await _connect(course_id + 999, await _sessionid(teacher))
    assert not ok and code == 4001
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_message_is_persisted_and_broadcast_to_room():
    teacher, student, _, course_id = await _setup()
    ok_t, _, comm_t = await _connect(course_id, await _sessionid(teacher))
    ok_s, _, comm_s = await _connect(course_id, await _sessionid(student))
    assert ok_t and ok_s

    await comm_s.send_json_to({"message": "  When is the lab?  "})
    for comm in (comm_t, comm_s):
        payload = await comm.receive_json_from(timeout=1)
        assert payload["type"] == "chat.message"
        assert payload["message"] == "When is the lab?"
        assert payload["sender"] == "Arun"
        assert payload["sender_id"] == student.pk
        assert payload["course"] == course_id

    assert await _messages(course_id) == ["When is the lab?"]
    await comm_t.disconnect()
    await comm_s.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_blank_messages_are_ignored_and_long_ones_truncated():
    teacher, _, _, course_id = await _setup()
    ok, _, comm = await _connect(course_id, await _sessionid(teacher))
    assert ok
    await comm.send_json_to({"message": "   "})
    await comm.send_json_to({"message": "x" * (MAX_MESSAGE_LENGTH + 20)})
    payload = await comm.receive_json_from(timeout=1)
    assert len(payload["message"]) == MAX_MESSAGE_LENGTH
    assert await comm.receive_nothing(timeout=0.1)
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_rate_limit_drops_sixth_message_in_window():
    teacher, _, _, course_id = await _setup()
    ok, _, comm = await _connect(course_id, await _sessionid(teacher))
    assert ok
    for i in range(6):
        await comm.send_json_to({"message": f"m{i}"})
    received = [await comm.receive_json_from(timeout=1) for _ in range(5)]
    assert [m["message"] for m in received] == [f"m{i}" for i in range(5)]
    assert await comm.receive_nothing(timeout=0.2)
    await comm.disconnect()
    assert await _messages(course_id) == [f"m{i}" for i in range(5)]


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_malformed_frames_are_ignored_and_socket_stays_open():
    teacher, _, _, course_id = await _setup()
    ok, _, comm = await _connect(course_id, await _sessionid(teacher))
    assert ok
    for frame in ({"message": None}, ["hi"], 42, {"message": 5}, {"text": "hi"}):
        await comm.send_json_to(frame)
    assert await comm.receive_nothing(timeout=0.1)
    await comm.send_json_to({"message": "still here"})
    payload = await comm.receive_json_from(timeout=1)
    assert payload["message"] == "still here"
    await comm.disconnect()
    assert await _messages(course_id) == ["still here"]
