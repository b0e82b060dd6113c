from __future__ import annotations

import asyncio
import logging

import pytest
from channels.db import database_sync_to_async
from channels.testing import WebsocketCommunicator
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import Client

from accounts.models import Profile, Role
from academics.models import Department
from config.asgi import application
from dashboard.consumers import DashboardStatsConsumer
from dashboard.stats import GenerationCounter


@database_sync_to_async
def _session_for(role):
    user = get_user_model().objects.create_user(username=f"ws-{role}", password="pw")
    Profile.objects.create(user=user, role=role)
    c = Client()
    c.force_login(user)
    return c.cookies[settings.SESSION_COOKIE_NAME].value


async def _connect(sessionid: str):
    headers = [(b"cookie", f"{settings.SESSION_COOKIE_NAME}={sessionid}".encode())]
    comm = WebsocketCommunicator(application, "/ws/dashboard/stats/", headers=headers)
    connected, code = await comm.connect()
    return connected, code, comm


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_super_admin_receives_counts_on_connect_and_on_change():
    ok, _, comm = await _connect(await _session_for(Role.SUPER_ADMIN))
    assert ok
    first = await comm.receive_json_from(timeout=1)
    assert first["type"] == "stats"
    assert first["counts"] == {"profiles": 1, "departments": 0, "courses": 0, "pending_od": 0}

    await database_sync_to_async(Department.objects.create)(name="Chemistry", code="ch")
    pushed = await comm.receive_json_from(timeout=1)
    assert pushed["counts"]["departments"] == 1
    assert pushed["generation"] > first["generation"]
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_refresh_action_pushes_again():
    ok, _, comm = await _connect(await _session_for(Role.SUPER_ADMIN))
    assert ok
    await comm.receive_json_from(timeout=1)
    await comm.send_json_to({"action": "refresh"})
    again = await comm.receive_json_from(timeout=1)
    assert again["type"] == "stats"
    await comm.send_json_to({"action": "something-else"})
    assert await comm.receive_nothing(timeout=0.1)
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
@pytest.mark.parametrize("role", [Role.ADMIN, Role.TEACHER, Role.STUDENT])
async def test_other_roles_are_rejected(role):
    ok, code, comm = await _connect(await _session_for(role))
    assert not ok and code == 4001
    await comm.disconnect()


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_stale_refresh_is_discarded(monkeypatch):
    monkeypatch.setattr("dashboard.consumers.quick_start_counts", lambda: {"profiles": 0})
    consumer = DashboardStatsConsumer()
    consumer.generation = GenerationCounter()
    sent = []

    async def fake_send(content, close=False):
        sent.append(content)

    consumer.send_json = fake_send
    stale = consumer.generation.next()
    current = consumer.generation.next()
    await consumer.refresh(stale)
    assert sent == []
    await consumer.refresh(current)
    assert sent == [{"type": "stats", "generation": current, "counts": {"profiles": 0}}]


def _bare_consumer():
    consumer = DashboardStatsConsumer()
    consumer.generation = GenerationCounter()
    consumer._tasks = set()
    consumer._joined = False
    sent = []

    async def fake_send(content, close=False):
        sent.append(content)

    consumer.send_json = fake_send
    return consumer, sent


@pytest.mark.asyncio
async def test_disconnect_cancels_pending_refresh():
    consumer, sent = _bare_consumer()
    never = asyncio.Event()

    async def slow_refresh(generation):
        await never.wait()
        await consumer.send_json({"type": "stats", "generation": generation})

    consumer.refresh = slow_refresh
    task = consumer.schedule_refresh()
    await asyncio.sleep(0)
    await consumer.disconnect(1000)
    with pytest.raises(asyncio.CancelledError):
        await task
    await asyncio.sleep(0)
    assert task.cancelled()
    assert sent == []
    assert consumer._tasks == set()


@pytest.mark.asyncio
async def test_failed_refresh_is_logged(caplog):
    consumer, sent = _bare_consumer()

    async def broken_refresh(generation):
        raise DatabaseError("boom")

    consumer.refresh = broken_refresh
    caplog.set_level(logging.ERROR, logger="dashboard.consumers")
    task = consumer.schedule_refresh()
    with pytest.raises(DatabaseError):
        await task
    await asyncio.sleep(0)
    assert "Stats refresh failed" in caplog.text
    assert consumer._tasks == set()
    assert sent == []


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
@pytest.mark.ws
async def test_non_object_frames_are_ignored():
    ok, _, comm = await _connect(await _session_for(Role.SUPER_ADMIN))
    assert ok
    await comm.receive_json_from(timeout=1)
    for frame in (None, ["refresh"], 7, "refresh"):
        await comm.send_json_to(frame)
    assert await comm.receive_nothing(timeout=0.1)
    await comm.send_json_to({"action": "refresh"})
    again = await comm.receive_json_from(timeout=1)
    assert again["type"] == "stats"
    await comm.disconnect()
