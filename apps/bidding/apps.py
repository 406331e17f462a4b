from django.apps import AppConfig


class BiddingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.bidding"
    verbose_name = "Reverse Bidding"

    def ready(self):
        import apps.bidding.signals  # noqa: F401
