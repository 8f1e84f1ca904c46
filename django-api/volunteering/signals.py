"""Django signals for cache invalidation."""

from functools import partial

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from volunteering.models import Project
from volunteering.stores.cached_store import project_cache_key


@receiver([post_save, post_delete], sender=Project)
def invalidate_project_cache(sender, instance, **kwargs):
    """Invalidate the cached project once the change is committed."""
    key = project_cache_key(instance.pk)
    cache.delete(key)
    transaction.on_commit(partial(cache.delete, key))
