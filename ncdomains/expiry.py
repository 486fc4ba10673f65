'''
**ncdomains.expiry**
-----------------

Expiration checks over the account's domains: days left, a coarse
urgency status, and the list of domains expiring within a threshold.
'''
import dataclasses as dc
import datetime as dt
from collections.abc import Iterable
from typing import Literal

from ncdomains.domains import DomainInfo

ExpiryStatus = Literal['expired', 'urgent', 'expiring-soon', 'active', 'unknown']

URGENT_DAYS = 7
EXPIRING_SOON_DAYS = 30


@dc.dataclass(slots=True, frozen=True)
class ExpiringDomain:
    domain: DomainInfo
    days_left: int

    @property
    def status(self) -> ExpiryStatus:
        return expiry_status(self.days_left)


def days_until_expiry(info: DomainInfo, today: dt.date | None = None) -> int | None:
    if info.expires is None:
        return None
    return (info.expires - (today or dt.date.today())).days


def expiry_status(days_left: int | None) -> ExpiryStatus:
    if days_left is None:
        return 'unknown'
    if days_left <= 0:
        return 'expired'
    if days_left <= URGENT_DAYS:
        return 'urgent'
    if days_left <= EXPIRING_SOON_DAYS:
        return 'expiring-soon'
    return 'active'


def find_expiring(
    domains: Iterable[DomainInfo],
    threshold_days: int = EXPIRING_SOON_DAYS,
    *,
    today: dt.date | None = None,
) -> list[ExpiringDomain]:
    '''
    Domains expiring within `threshold_days` (already expired included),
    soonest first. Domains without a parseable expiry date are skipped.

    Parameters
    ----------
    domains : Iterable[DomainInfo]
    threshold_days : int, optional
        by default 30
    today : dt.date | None, optional
        Reference date, by default the current local date

    Returns
    -------
    list[ExpiringDomain]
    '''
    today = today or dt.date.today()
    expiring = []
    for info in domains:
        days_left = days_until_expiry(info, today)
        if days_left is not None and days_left <= threshold_days:
            expiring.append(ExpiringDomain(domain=info, days_left=days_left))

    expiring.sort(key=lambda item: item.days_left)
    return expiring
