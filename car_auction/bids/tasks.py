import logging

from celery import shared_task

from car_auction.bids.services.auction_service import AuctionService

logger = logging.getLogger(__name__)


@shared_task
def close_ended_auctions():
    """Periodic sweep, scheduled by celery beat."""
    report = AuctionService.run_closing_sweep()

    closed = [o for o in report["outcomes"] if o["status"] != "skipped"]
    if report["errors"]:
        logger.warning(f"Closing sweep finished with {len(report['errors'])} error(s): {report['errors']}")
    else:
        logger.info(f"Closing sweep finished, {len(closed)} auction(s) closed.")

    return {
        "closed": len(closed),
        "skipped": len(report["outcomes"]) - len(closed),
        "errors": len(report["errors"]),
    }
