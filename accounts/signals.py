import logging
from urllib.parse import urlparse

from django.conf import settings
from django.contrib.auth.signals import user_logged_in
from django.contrib.sites.models import Site
from django.db import DatabaseError
from django.db.models.signals import post_migrate
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    from dashboard.services import record_activity

    # a failed feed write must not block the login
    try:
        record_activity(
            "login",
            f"{user.name or user.email} logged in as {user.role}",
            user=user,
        )
    except DatabaseError:
        logger.warning("Could not record login activity for user %s", user.pk)


@receiver(post_migrate)
def sync_site_domain(sender, **kwargs):
    site_url = getattr(settings, "SITE_URL", "")
    if not site_url or sender.name != "accounts":
        return
    host = urlparse(site_url).hostname or "example.com"
    sid = getattr(settings, "SITE_ID", 1)
    Site.objects.update_or_create(id=sid, defaults={"domain": host, "name": host})
