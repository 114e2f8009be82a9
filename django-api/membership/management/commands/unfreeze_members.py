from django.core.management.base import BaseCommand

from membership.services.freeze_service import FreezeService
from membership.stores.django_store import DjangoMembershipStore


class Command(BaseCommand):
    help = "Reactivate members whose subscription freeze has ended."

    def handle(self, *args, **options):
        count = FreezeService(DjangoMembershipStore()).unfreeze_expired()
        self.stdout.write(self.style.SUCCESS(f"Reactivated {count} member(s)"))
