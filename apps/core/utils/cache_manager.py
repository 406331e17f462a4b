import logging
from django.conf import settings
from django.core.cache import cache

from .cache_key_manager import CacheKeyManager

logger = logging.getLogger("monitoring")


class CacheManager:
    """
    Centralized invalidation of cache keys per resource,
    driven by settings.CACHE_KEY_TEMPLATES.
    """

    @staticmethod
    def invalidate(resource_name: str, **kwargs):
        """
        Invalidate every key of the given resource that can be built from
        the supplied kwargs. Templates needing a placeholder that was not
        supplied are skipped.

        Example:
            CacheManager.invalidate("bidding", user_id=42, product_id="sku-1")
        """
        templates = getattr(settings, "CACHE_KEY_TEMPLATES", {})
        if resource_name not in templates:
            logger.warning(f"No cache templates found for resource '{resource_name}'")
            return

        to_delete = []
        for key_name in templates[resource_name]:
            placeholders = CacheKeyManager.get_template_placeholders(
                resource_name, key_name
            )
            if not all(name in kwargs for name in placeholders):
                continue
            to_delete.append(CacheKeyManager.make_key(resource_name, key_name, **kwargs))

        if to_delete:
            cache.delete_many(to_delete)
            logger.debug(f"Invalidated cache keys: {to_delete}")

    @staticmethod
    def invalidate_key(resource_name: str, key_name: str, **kwargs):
        """
        Invalidate a specific cache key.

        Example:
            CacheManager.invalidate_key("bidding_admin", "stats")
        """
        cache_key = CacheKeyManager.make_key(resource_name, key_name, **kwargs)
        cache.delete(cache_key)
        logger.debug(f"Invalidated cache key: {cache_key}")

    @staticmethod
    def cache_exists(resource_name: str, key_name: str, **kwargs) -> bool:
        """
        Check if a specific cache key exists.
        """
        cache_key = CacheKeyManager.make_key(resource_name, key_name, **kwargs)
        return cache.get(cache_key) is not None
