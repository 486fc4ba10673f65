import dataclasses as dc
import datetime as dt
from decimal import Decimal


@dc.dataclass(slots=True, frozen=True)
class DomainCheckResult:
    domain: str
    available: bool
    is_premium: bool = False
    premium_price: Decimal | None = None


@dc.dataclass(slots=True, frozen=True)
class DomainInfo:
    '''
    A domain in the account, from either the list or the get-info command.
    Dates are None when the registrar sends something unparseable.
    '''
    domain_name: str
    created: dt.date | None
    expires: dt.date | None
    is_locked: bool = False
    is_auto_renew: bool = False
    whois_guard: bool = False


@dc.dataclass(slots=True)
class DomainPage:
    '''
    One page of the account's domains. `total_items` is the account-wide
    count from the paging node, not `len(domains)`.
    '''
    domains: list[DomainInfo] = dc.field(default_factory=list)
    total_items: int = 0
    current_page: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return -(-self.total_items // self.page_size)


@dc.dataclass(slots=True, frozen=True)
class ContactInfo:
    '''
    A registrant contact. The same contact is sent for the registrant,
    technical, admin and billing roles.
    '''
    first_name: str
    last_name: str
    address1: str
    city: str
    state_province: str
    postal_code: str
    country: str
    phone: str
    email_address: str
    organization_name: str | None = None
    address2: str | None = None


@dc.dataclass(slots=True, frozen=True)
class RegistrationResult:
    '''
    The outcome of a registration. `registered` is False without any
    ids when the availability check found the domain taken.
    '''
    domain: str
    registered: bool
    domain_id: str | None = None
    order_id: str | None = None
    transaction_id: str | None = None
    charged_amount: Decimal | None = None
