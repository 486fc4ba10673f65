from __future__ import annotations

import logging
from collections.abc import Iterable

from lxml import etree

from ncdomains.api import CommandResult, attr_bool
from ncdomains.dns._records import DNSRecord, ZoneRecordSet

logger = logging.getLogger(__name__)


def split_domain(domain: str) -> tuple[str, str]:
    '''
    Split a domain into the (SLD, TLD) pair the DNS commands address
    zones by: the first label, and everything after the first dot.

    >>> split_domain('example.co.uk')
    ('example', 'co.uk')
    '''
    sld, _, tld = domain.partition('.')
    return sld, tld


def _int_or_none(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric host attribute value '{value}'")
        return None


def parse_host(node: etree._Element) -> DNSRecord:
    return DNSRecord(
        name=node.get('Name', ''),
        type=node.get('Type', ''),  # type: ignore[arg-type]
        address=node.get('Address', ''),
        mx_pref=_int_or_none(node.get('MXPref')),
        ttl=_int_or_none(node.get('TTL')),
        host_id=node.get('HostId'),
    )


def parse_zone(result: CommandResult, domain: str) -> ZoneRecordSet:
    '''
    Normalize a `namecheap.domains.dns.getHosts` result.

    Parameters
    ----------
    result : CommandResult
    domain : str

    Returns
    -------
    ZoneRecordSet
    '''
    hosts = result.require('DomainDNSGetHostsResult')
    zone = ZoneRecordSet(
        domain=domain,
        records=[parse_host(node) for node in hosts.iterchildren('host', 'Host')],
        email_type=hosts.get('EmailType') or None,
    )
    if hosts.get('IsUsingOurDNS') is not None:
        zone.is_using_our_dns = attr_bool(hosts, 'IsUsingOurDNS')
    return zone


def host_params(
    domain: str,
    records: Iterable[DNSRecord],
    email_type: str | None = None,
) -> dict[str, str | int]:
    '''
    Flatten a record sequence into the indexed parameters of
    `namecheap.domains.dns.setHosts`. Indexes are 1-based and follow the
    sequence order; `MXPref{i}` and `TTL{i}` are only sent when set.

    Parameters
    ----------
    domain : str
    records : Iterable[DNSRecord]
    email_type : str | None, optional
        Zone-level mail setting to send along, by default None

    Returns
    -------
    dict[str, str | int]
    '''
    sld, tld = split_domain(domain)
    params: dict[str, str | int] = {'SLD': sld, 'TLD': tld}
    if email_type:
        params['EmailType'] = email_type

    for index, record in enumerate(records, start=1):
        params[f'HostName{index}'] = record.name
        params[f'RecordType{index}'] = record.type
        params[f'Address{index}'] = record.address
        if record.mx_pref is not None:
            params[f'MXPref{index}'] = record.mx_pref
        if record.ttl is not None:
            params[f'TTL{index}'] = record.ttl

    return params
