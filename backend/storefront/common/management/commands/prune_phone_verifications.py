# storefront/common/management/commands/prune_phone_verifications.py
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from storefront.customer_sessions.services import purge_expired_sessions
from storefront.phone_auth.services import prune_verifications


class Command(BaseCommand):
    help = "Delete long-expired phone verification codes and expired customer sessions"

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than-hours",
            type=int,
            default=24,
            help="keep codes that expired less than this many hours ago",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        cutoff = now - timedelta(hours=options["older_than_hours"])

        codes = prune_verifications(cutoff)
        sessions = purge_expired_sessions(now)

        self.stdout.write(
            self.style.SUCCESS(
                f"pruned phone_verifications={codes} customer_sessions={sessions}"
            )
        )
