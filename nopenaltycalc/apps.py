from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _

from nopenaltycalc.checks import register_startup_checks


class NoPenaltyCalcConfig(AppConfig):
    name = "nopenaltycalc"
    verbose_name = _("No-penalty grade calculation")

    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        import nopenaltycalc.receivers  # noqa

        register_startup_checks()
