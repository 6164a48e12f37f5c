from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.contrib.auth import get_user_model

from car_auction.inventory.models import Car

User = get_user_model()


class Auction(models.Model):
    ACTIVE = 'active'
    COMPLETED = 'completed'
    RESERVE_NOT_MET = 'reserve_not_met'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (ACTIVE, 'Active'),
        (COMPLETED, 'Completed'),
        (RESERVE_NOT_MET, 'Reserve Not Met'),
        (CANCELLED, 'Cancelled'),
    ]

    car = models.OneToOneField(Car, on_delete=models.CASCADE, related_name='auction')
    seller = models.ForeignKey(User, on_delete=models.CASCADE, related_name='auctions')
    starting_price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    # cached copy of the highest accepted bid, advanced only by BidService
    current_price = models.DecimalField(max_digits=12, decimal_places=2)
    reserve_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    end_at = models.DateTimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=ACTIVE)
    winning_bid = models.ForeignKey('Bid', on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    created_at = models.DateTimeField(auto_now_add=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'end_at'], name='idx_auction_status_end'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(current_price__gte=F('starting_price')),
                name='auction_price_not_below_start',
            ),
        ]

    def __str__(self):
        return f"Auction #{self.pk} for {self.car} ({self.status})"


class Bid(models.Model):
    auction = models.ForeignKey(Auction, on_delete=models.PROTECT, related_name='bids')
    bidder = models.ForeignKey(User, on_delete=models.PROTECT, related_name='bids')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    # stamped by BidService with the same clock used to validate the bid
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['auction', '-amount'], name='idx_bid_auction_amount'),
            models.Index(fields=['auction', '-created_at'], name='idx_bid_auction_created'),
        ]

    def __str__(self):
        return f"Bid of {self.amount} by {self.bidder.email} on auction #{self.auction_id}"

    def save(self, *args, **kwargs):
        # append-only ledger
        if not self._state.adding:
            raise ValidationError("Accepted bids cannot be modified.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Accepted bids cannot be deleted.")
