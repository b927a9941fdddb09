"""
App Settings — read from the ENERGY_TRADING dict in Django settings.

    ENERGY_TRADING = {
        "MAX_ARGUMENT_LENGTH": 256,
        "LEDGER_BACKEND": "orm",   # or "memory"
    }

Values are looked up on every access so override_settings() in tests
takes effect immediately.
"""

from django.conf import settings

DEFAULTS = {
    "MAX_ARGUMENT_LENGTH": 256,
    "LEDGER_BACKEND": "orm",
}


class AppSettings:

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid ENERGY_TRADING setting: {name!r}")
        user_settings = getattr(settings, "ENERGY_TRADING", {})
        return user_settings.get(name, DEFAULTS[name])


app_settings = AppSettings()
