import logging
from typing import Dict, List
import re

from django.conf import settings

logger = logging.getLogger("monitoring")


class CacheKeyManager:
    """
    Centralized creation of cache keys based on templates defined in
    settings.CACHE_KEY_TEMPLATES.

    Usage:
        from apps.core.utils.cache_key_manager import CacheKeyManager

        key = CacheKeyManager.make_key("bidding", "quota", user_id=42)
        # → "bidengine:bidding:quota:user:42"
    """

    @staticmethod
    def _get_template(resource_name: str, key_name: str) -> str:
        """Retrieve the raw template string, or log + raise if missing."""
        templates = getattr(settings, "CACHE_KEY_TEMPLATES", {})
        if resource_name not in templates:
            logger.error(
                f"[CacheKeyManager] No templates configured for resource '{resource_name}'"
            )
            raise KeyError(f"No templates for resource '{resource_name}'")
        resource_templates = templates[resource_name]
        if key_name not in resource_templates:
            logger.error(
                f"[CacheKeyManager] No template named '{key_name}' for resource '{resource_name}'"
            )
            raise KeyError(f"No key '{key_name}' for resource '{resource_name}'")
        return resource_templates[key_name]

    @staticmethod
    def make_key(resource_name: str, key_name: str, **kwargs) -> str:
        """
        Build an exact cache key.

        Example:
            CacheKeyManager.make_key("bidding", "attempts", user_id=1, product_id="p-9")
            → "bidengine:bidding:attempts:user:1:product:p-9"
        """
        raw_template = CacheKeyManager._get_template(resource_name, key_name)
        try:
            filled = raw_template.format(**kwargs)
        except KeyError as e:
            missing = e.args[0]
            logger.error(
                f"[CacheKeyManager] Missing argument '{missing}' when formatting '{raw_template}'"
            )
            raise

        prefix = settings.CACHES["default"].get("KEY_PREFIX", "")
        if prefix:
            return f"{prefix}:{filled}"
        return filled

    @staticmethod
    def get_available_templates(resource_name: str) -> Dict[str, str]:
        """
        Get all available cache key templates for a resource.
        """
        templates = getattr(settings, "CACHE_KEY_TEMPLATES", {})
        return templates.get(resource_name, {})

    @staticmethod
    def get_template_placeholders(resource_name: str, key_name: str) -> List[str]:
        """
        Extract placeholder names from a template.

        Example:
            CacheKeyManager.get_template_placeholders("bidding", "attempts")
            # Returns: ["user_id", "product_id"]
        """
        try:
            raw_template = CacheKeyManager._get_template(resource_name, key_name)
        except KeyError:
            return []
        return re.findall(r"\{([^}]+)\}", raw_template)
