# Reverse Bidding Settings
BIDDING_SETTINGS = {
    # Business Rules
    "MAX_ATTEMPTS": 3,  # Bids per user per product
    "FREE_BID_GRANT": 5,  # Free bid cards for new users
    "SPEND_UNLOCK_AMOUNT": 3000,  # Cumulative spend that unlocks unlimited bidding
    "MIN_PRODUCT_PRICE": 1000,  # Products below this price are never negotiable
    "SUGGESTED_INCREASES": [50, 100, 200],
    # Spend level a user reaches once total spend crosses the amount
    "SPEND_LEVEL_THRESHOLDS": {1: 3000, 2: 5000},
    # Eligibility
    "FIXED_PRICE_CATEGORIES": ["mobiles", "laptops", "electronics"],
    # UI hint only, never used to accept or refuse a bid
    "BIDDING_CATEGORIES": [
        "fashion",
        "shoes",
        "watches",
        "accessories",
        "bags",
        "gym",
        "stationery",
        "lifestyle",
    ],
    "BIDDING_CATEGORY_KEYWORDS": ["men", "women", "footwear", "clothing"],
    # Caching
    "CACHE_TIMEOUT_SHORT": 60,  # 1 minute
    "CACHE_TIMEOUT_MEDIUM": 300,  # 5 minutes
}
