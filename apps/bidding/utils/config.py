from django.conf import settings


def get_bidding_setting(name, default=None):
    """Read one key of settings.BIDDING_SETTINGS."""
    return getattr(settings, "BIDDING_SETTINGS", {}).get(name, default)


def max_attempts() -> int:
    return get_bidding_setting("MAX_ATTEMPTS", 3)


def spend_unlock_amount() -> int:
    return get_bidding_setting("SPEND_UNLOCK_AMOUNT", 3000)
