"""Shared pytest fixtures for every app's tests."""
import logging
import itertools

import pytest
from django.contrib.auth import get_user_model
from django.test import Client

from accounts.models import Profile, Role
from academics.models import Course, Department

PASSWORD = "pw-Strong-123"
_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def silence_django_request_logger():
    """Reduce noise from expected 4xx in passing tests.

    Many tests intentionally exercise 400/403 paths. Django logs these at
    WARNING via 'django.request'; lower that logger to ERROR meanwhile.
    """
    logger = logging.getLogger("django.request")
    old = logger.level
    logger.setLevel(logging.ERROR)
    try:
        yield
    finally:
        logger.setLevel(old)


@pytest.fixture
def department(db):
    return Department.objects.create(name="Computer Science", code="cs")


@pytest.fixture
def course(department):
    return Course.objects.create(name="Data Structures", code="cs201", department=department, credits=4)


@pytest.fixture
def make_user(db):
    """Create a user; `role=None` leaves it without a profile row.

    Extra keyword arguments are stored on the profile.
    """

    def _make(role=Role.STUDENT, username=None, email=None, **profile_fields):
        n = next(_seq)
        username = username or f"user{n}"
        user = get_user_model().objects.create_user(
            username=username, email=email or f"{username}@example.com", password=PASSWORD
        )
        if role is not None:
            Profile.objects.create(user=user, role=role, first_name=username.title(), **profile_fields)
        return user

    return _make


@pytest.fixture
def client_for(db):
    """A test client already signed in as `user`."""

    def _client(user):
        c = Client()
        c.force_login(user)
        return c

    return _client
