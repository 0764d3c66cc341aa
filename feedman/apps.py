"""Django app configuration for Feedman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class FeedmanConfig(AppConfig):
    """Configuration for Feedman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "feedman"
    verbose_name = _("Ração e Arraçoamento")
