from django.apps import AppConfig


class MembershipConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "membership"

    def ready(self) -> None:
        from membership import signals  # noqa: F401
