"""Auth event stream: sign-in, sign-out and failed sign-in.

Django emits these signals from `login()`, `logout()` and
`authenticate()`. The receivers report the event to the user and the
log; navigation is decided by `session.handle_auth_event` in the views.
"""
import logging

from django.contrib import messages
from django.contrib.auth.signals import user_logged_in, user_logged_out, user_login_failed
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_signed_in(sender, request, user, **kwargs):  # noqa: D401
    logger.info("User %s signed in", user.pk)
    if request is not None:
        messages.success(request, "Logged in successfully!", fail_silently=True)


@receiver(user_logged_out)
def on_signed_out(sender, request, user, **kwargs):  # noqa: D401
    logger.info("User %s signed out", getattr(user, "pk", None))
    if request is not None:
        messages.success(request, "Logged out successfully!", fail_silently=True)


@receiver(user_login_failed)
def on_sign_in_failed(sender, credentials, request=None, **kwargs):  # noqa: D401
    # `credentials` is already scrubbed of the password by Django.
    logger.warning("Failed sign-in for %s", credentials.get("username", ""))
