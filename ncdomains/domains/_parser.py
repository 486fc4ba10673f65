'''
One normalizer per domain command. The registrar returns the same kind
of data in different shapes: check and list results are attribute based,
get-info nests each field in its own element.
'''
from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal, InvalidOperation

from lxml import etree

from ncdomains.api import CommandResult, attr_bool, child_text, value_of
from ncdomains.domains._models import (
    ContactInfo,
    DomainCheckResult,
    DomainInfo,
    DomainPage,
    RegistrationResult,
)

logger = logging.getLogger(__name__)

DATE_FORMAT = '%m/%d/%Y'

CONTACT_ROLES = ('Registrant', 'Tech', 'Admin', 'AuxBilling')


def parse_date(value: str | None) -> dt.date | None:
    if not value:
        return None
    try:
        return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        logger.warning(f"Unparseable registrar date '{value}'")
        return None


def parse_decimal(value: str | None) -> Decimal | None:
    if value is None or not value.strip():
        return None
    try:
        return Decimal(value.strip())
    except InvalidOperation:
        logger.warning(f"Unparseable registrar amount '{value}'")
        return None


def _int(value: str | None, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except ValueError:
        return default


def parse_check_node(node: etree._Element) -> DomainCheckResult:
    is_premium = attr_bool(node, 'IsPremiumName')
    return DomainCheckResult(
        domain=node.get('Domain', ''),
        available=attr_bool(node, 'Available'),
        is_premium=is_premium,
        premium_price=(
            parse_decimal(node.get('PremiumRegistrationPrice')) if is_premium else None
        ),
    )


def parse_check(result: CommandResult) -> list[DomainCheckResult]:
    '''
    Normalize a `namecheap.domains.check` result, one entry per
    `DomainCheckResult` node in document order.
    '''
    return [parse_check_node(node) for node in result.findall('DomainCheckResult')]


def parse_list_node(node: etree._Element) -> DomainInfo:
    return DomainInfo(
        domain_name=node.get('Name', ''),
        created=parse_date(node.get('Created')),
        expires=parse_date(node.get('Expires')),
        is_locked=attr_bool(node, 'IsLocked'),
        is_auto_renew=attr_bool(node, 'AutoRenew'),
        whois_guard=(node.get('WhoisGuard') or '').upper() == 'ENABLED',
    )


def parse_domain_list(result: CommandResult, page: int, page_size: int) -> DomainPage:
    '''
    Normalize a `namecheap.domains.getList` result.

    The total comes from the `Paging` node, which is read on its own:
    a partial page holds fewer domains than the total.

    Parameters
    ----------
    result : CommandResult
    page : int
        The page requested, used when the paging node omits it.
    page_size : int
        The page size requested, used when the paging node omits it.

    Returns
    -------
    DomainPage
    '''
    domains = [
        parse_list_node(node)
        for node in result.findall('DomainGetListResult/Domain')
    ]

    paging = result.paging
    if paging is None:
        logger.warning('getList response carried no Paging node, using page length')
        return DomainPage(
            domains=domains,
            total_items=len(domains),
            current_page=page,
            page_size=page_size,
        )

    return DomainPage(
        domains=domains,
        total_items=_int(value_of(paging, 'TotalItems'), len(domains)),
        current_page=_int(value_of(paging, 'CurrentPage'), page),
        page_size=_int(value_of(paging, 'PageSize'), page_size),
    )


def _find_either(node: etree._Element, *paths: str) -> etree._Element | None:
    for path in paths:
        if (found := node.find(path)) is not None:
            return found
    return None


def parse_domain_info(result: CommandResult, domain: str) -> DomainInfo:
    '''
    Normalize a `namecheap.domains.getInfo` result into the same
    `DomainInfo` shape the list command produces.

    Parameters
    ----------
    result : CommandResult
    domain : str
        The requested domain, used when the result omits its name.

    Returns
    -------
    DomainInfo
    '''
    info = result.require('DomainGetInfoResult')
    details = result.require('DomainGetInfoResult/DomainDetails')

    guard = _find_either(details, 'WhoisGuard', 'Whoisguard')
    if guard is None:
        guard = _find_either(info, 'WhoisGuard', 'Whoisguard')

    locked = child_text(details, 'IsLocked')
    auto_renew = child_text(details, 'AutoRenew')

    return DomainInfo(
        domain_name=info.get('DomainName') or domain,
        created=parse_date(child_text(details, 'CreatedDate')),
        expires=parse_date(child_text(details, 'ExpiredDate')),
        is_locked=(locked or '').lower() == 'true',
        is_auto_renew=(auto_renew or '').lower() == 'true',
        whois_guard=guard is not None and attr_bool(guard, 'Enabled'),
    )


def contact_params(contact: ContactInfo) -> dict[str, str | None]:
    '''
    The contact parameters of `namecheap.domains.create`, one copy of
    `contact` per role.
    '''
    fields = {
        'FirstName': contact.first_name,
        'LastName': contact.last_name,
        'OrganizationName': contact.organization_name,
        'Address1': contact.address1,
        'Address2': contact.address2,
        'City': contact.city,
        'StateProvince': contact.state_province,
        'PostalCode': contact.postal_code,
        'Country': contact.country,
        'Phone': contact.phone,
        'EmailAddress': contact.email_address,
    }
    return {
        f'{role}{name}': value
        for role in CONTACT_ROLES
        for name, value in fields.items()
    }


def parse_registration(result: CommandResult, domain: str) -> RegistrationResult:
    '''
    Normalize a `namecheap.domains.create` result.
    '''
    created = result.require('DomainCreateResult')
    return RegistrationResult(
        domain=created.get('Domain') or domain,
        registered=attr_bool(created, 'Registered'),
        domain_id=created.get('DomainID'),
        order_id=created.get('OrderID'),
        transaction_id=created.get('TransactionID'),
        charged_amount=parse_decimal(created.get('ChargedAmount')),
    )
