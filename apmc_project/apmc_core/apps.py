from django.apps import AppConfig


class ApmcCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apmc_core"
    verbose_name = "APMC trading ledger"

    # ensure receivers are registered
    def ready(self):
        import apmc_core.signals  # noqa: F401
