from django.apps import AppConfig


class EnergyTradingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "energy_trading"
    verbose_name = "Energy Trading Ledger"
