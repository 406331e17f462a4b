# -----------------------------------------------------------------------------
# CENTRALIZED CACHE-KEY TEMPLATES
#
# For each "resource" you want to cache, list every "key name" you might use.
# Use Python-format placeholders for variable parts.
#
# Usage:
#    CacheKeyManager.make_key("bidding", "quota", user_id=42)
#    → "bidding:quota:user:42"
#
# The code will always prepend Django's KEY_PREFIX automatically.
# -----------------------------------------------------------------------------
CACHE_KEY_TEMPLATES = {
    "bidding": {
        "quota": "bidding:quota:user:{user_id}",
        "attempts": "bidding:attempts:user:{user_id}:product:{product_id}",
    },
    "bidding_admin": {
        "stats": "bidding_admin:stats",
    },
}
