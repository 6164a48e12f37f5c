from django.core.management.base import BaseCommand

from car_auction.bids.services.auction_service import AuctionService


class Command(BaseCommand):
    help = 'Close every active auction whose end time has passed'

    def handle(self, *args, **options):
        report = AuctionService.run_closing_sweep()

        for outcome in report["outcomes"]:
            self.stdout.write(self.style.SUCCESS(
                f"Auction {outcome['auction_id']}: {outcome['status']}"
            ))
        for error in report["errors"]:
            self.stderr.write(self.style.ERROR(
                f"Auction {error['auction_id']} failed: {error['error']}"
            ))

        if not report["outcomes"] and not report["errors"]:
            self.stdout.write("No ended auctions to close.")
