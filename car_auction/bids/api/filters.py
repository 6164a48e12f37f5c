import django_filters

from ..models import Auction


class AuctionFilter(django_filters.FilterSet):
    make = django_filters.CharFilter(field_name="car__make", lookup_expr="iexact")
    model = django_filters.CharFilter(field_name="car__model", lookup_expr="iexact")
    min_year = django_filters.NumberFilter(field_name="car__year", lookup_expr="gte")
    max_year = django_filters.NumberFilter(field_name="car__year", lookup_expr="lte")
    min_price = django_filters.NumberFilter(field_name="current_price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="current_price", lookup_expr="lte")
    ends_before = django_filters.IsoDateTimeFilter(field_name="end_at", lookup_expr="lte")

    class Meta:
        model = Auction
        fields = ["make", "model", "min_year", "max_year", "min_price", "max_price", "ends_before"]
