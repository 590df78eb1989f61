import re

from rest_framework.throttling import SimpleRateThrottle

from classifiedsutils.log_helpers import get_client_ip

DURATION_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class ListingCreateRateThrottle(SimpleRateThrottle):
    """
    Per-address limit on listing submissions.

    Counted by client IP, so several accounts behind one address share a
    single quota. Rates may carry a multiplier on the period, e.g.
    ``"5/15m"`` means five submissions per fifteen minutes.
    """

    scope = "listing_create"

    def get_cache_key(self, request, view):
        return self.cache_format % {
            "scope": self.scope,
            "ident": get_client_ip(request),
        }

    def parse_rate(self, rate):
        if rate is None:
            return (None, None)
        num, period = rate.split("/")
        match = re.fullmatch(r"(\d*)([smhd])", period.strip())
        if match is None:
            raise ValueError(f"Invalid throttle period: {period!r}")
        multiplier = int(match.group(1) or 1)
        return int(num), multiplier * DURATION_SECONDS[match.group(2)]
