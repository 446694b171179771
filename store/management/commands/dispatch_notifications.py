import logging
import time

from django.core.management.base import BaseCommand

from store.notifications import dispatch_pending

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Send pending order notifications from the outbox, retrying failed ones with backoff."

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=None, help="Maximum notifications per pass")
        parser.add_argument("--loop", action="store_true", help="Keep polling instead of running one pass")
        parser.add_argument("--interval", type=float, default=10.0, help="Seconds between passes with --loop")

    def handle(self, *args, **options):
        while True:
            result = dispatch_pending(limit=options["limit"])
            if result.sent or result.retried or result.failed:
                logger.info(
                    "Dispatch pass: %s sent, %s retried, %s failed",
                    result.sent, result.retried, result.failed,
                )
            self.stdout.write(
                f"sent={result.sent} retried={result.retried} failed={result.failed} skipped={result.skipped}"
            )
            if not options["loop"]:
                return
            time.sleep(options["interval"])
