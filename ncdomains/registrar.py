'''
**ncdomains.registrar**
-----------------

The domain and DNS operations facade. `Registrar` turns domain-shaped
requests into one or more gateway commands and normalizes the results
into the values of `ncdomains.domains` and `ncdomains.dns`.

DNS writes
----------
The registrar has no single-record mutation, only "read every host" and
"replace every host". `add_dns_record`, `update_dns_record`,
`delete_dns_record` and `apply_dns_template` therefore read the zone,
compute the new record set and write all of it back. This is not atomic:
a change made by someone else between the read and the write is lost,
and there is no version token to detect it. Serialize writes per domain
if that matters. If the write fails after a successful read, the zone
state is unknown; read it again before retrying.

Update and delete with criteria matching no record still rewrite the
unchanged set and raise nothing. Check the returned match count.
'''
from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Self

import httpx

from ncdomains import dns, domains, expiry, http
from ncdomains.api import (
    ApiCredentials,
    CommandGateway,
    CommandResult,
    ResponseShapeError,
    Scalar,
)

logger = logging.getLogger(__name__)


CHECK = 'namecheap.domains.check'
GET_LIST = 'namecheap.domains.getList'
GET_INFO = 'namecheap.domains.getInfo'
CREATE = 'namecheap.domains.create'
GET_HOSTS = 'namecheap.domains.dns.getHosts'
SET_HOSTS = 'namecheap.domains.dns.setHosts'

# documented by the registrar, not enforced here
BULK_CHECK_LIMIT = 50


class Registrar:
    '''
    Domain and DNS operations over one `CommandGateway`. Build it once
    from explicit credentials and share it; it holds no state besides the
    HTTP connection pool.
    '''

    def __init__(
        self,
        credentials: ApiCredentials,
        *,
        config: http.ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        gateway: CommandGateway | None = None,
    ) -> None:
        self._gateway = gateway or CommandGateway(
            credentials,
            client=client,
            config=config,
        )

    @property
    def gateway(self) -> CommandGateway:
        return self._gateway

    async def invoke(
        self,
        command: str,
        params: Mapping[str, Scalar | None] | None = None,
    ) -> CommandResult:
        return await self._gateway.invoke(command, params)

    async def check_availability(self, domain: str) -> domains.DomainCheckResult:
        '''
        Check whether `domain` can be registered.

        Raises
        ------
        RemoteApiError
            If the registrar rejects the domain syntax.
        '''
        result = await self.invoke(CHECK, {'DomainList': domain})
        checks = domains.parse_check(result)
        if not checks:
            raise ResponseShapeError(f'{CHECK} returned no DomainCheckResult for {domain}')
        return checks[0]

    async def check_availability_bulk(
        self,
        names: Sequence[str],
    ) -> list[domains.DomainCheckResult]:
        '''
        Check several domains with a single command, results in request
        order. The registrar caps one call at `BULK_CHECK_LIMIT` domains;
        larger lists must be chunked by the caller, see
        `ncdomains.suggest.check_in_batches`.

        Parameters
        ----------
        names : Sequence[str]

        Returns
        -------
        list[DomainCheckResult]
        '''
        if not names:
            return []
        result = await self.invoke(CHECK, {'DomainList': ','.join(names)})
        return domains.parse_check(result)

    async def list_domains(self, page: int = 1, page_size: int = 20) -> domains.DomainPage:
        result = await self.invoke(GET_LIST, {'Page': page, 'PageSize': page_size})
        return domains.parse_domain_list(result, page, page_size)

    async def get_domain_info(self, domain: str) -> domains.DomainInfo:
        result = await self.invoke(GET_INFO, {'DomainName': domain})
        return domains.parse_domain_info(result, domain)

    async def get_zone(self, domain: str) -> dns.ZoneRecordSet:
        '''
        Read every host record of `domain` along with the zone's mail
        setting.

        Parameters
        ----------
        domain : str

        Returns
        -------
        ZoneRecordSet
        '''
        sld, tld = dns.split_domain(domain)
        result = await self.invoke(GET_HOSTS, {'SLD': sld, 'TLD': tld})
        zone = dns.parse_zone(result, domain)
        if not zone.is_using_our_dns:
            logger.warning(f'{domain} is not using the registrar DNS, host records have no effect')
        return zone

    async def get_dns_records(self, domain: str) -> list[dns.DNSRecord]:
        zone = await self.get_zone(domain)
        return zone.records

    async def set_dns_records(
        self,
        domain: str,
        records: Sequence[dns.DNSRecord],
        *,
        email_type: str | None = None,
    ) -> None:
        '''
        Replace the whole record set of `domain` with `records`. Any
        record not in `records` is removed from the zone.

        Parameters
        ----------
        domain : str
        records : Sequence[DNSRecord]
        email_type : str | None, optional
            Zone mail setting to send along, by default None (not sent)
        '''
        params = dns.host_params(domain, records, email_type=email_type)
        logger.info(f'Writing {len(records)} host record(s) to {domain}')
        result = await self.invoke(SET_HOSTS, params)

        outcome = result.command_response.find('DomainDNSSetHostsResult')
        if outcome is not None and outcome.get('IsSuccess', 'true').lower() != 'true':
            logger.warning(f'{SET_HOSTS} for {domain} reported IsSuccess={outcome.get("IsSuccess")}')

    async def _write_zone(self, zone: dns.ZoneRecordSet, records: list[dns.DNSRecord]) -> None:
        await self.set_dns_records(zone.domain, records, email_type=zone.email_type)

    async def add_dns_record(self, domain: str, record: dns.DNSRecord) -> None:
        '''
        Append `record` to the zone (read, append, write back).
        Not atomic, see the module documentation.
        '''
        zone = await self.get_zone(domain)
        await self._write_zone(zone, dns.add_record(zone.records, record))

    async def update_dns_record(
        self,
        domain: str,
        criteria: Mapping[str, Any],
        updates: Mapping[str, Any],
    ) -> int:
        '''
        Overlay `updates` on every record matching all fields of
        `criteria`, then write the whole set back.

        With zero matches the unchanged set is still written and nothing
        is raised. Not atomic, see the module documentation.

        Parameters
        ----------
        domain : str
        criteria : Mapping[str, Any]
            DNSRecord field names to exact values; absent fields match
            anything.
        updates : Mapping[str, Any]
            DNSRecord field names to new values.

        Returns
        -------
        int
            _The number of records updated_

        Raises
        ------
        TypeError
            If `criteria` or `updates` name a field DNSRecord lacks.
        ValueError
            If `mx_pref` or `ttl` is given as a non-numeric string.
        '''
        zone = await self.get_zone(domain)
        records, matched = dns.update_records(zone.records, criteria, updates)
        if not matched:
            logger.warning(f'No record of {domain} matched {dict(criteria)}, rewriting unchanged')
        await self._write_zone(zone, records)
        return matched

    async def delete_dns_record(self, domain: str, criteria: Mapping[str, Any]) -> int:
        '''
        Drop every record matching all fields of `criteria`, then write
        the remainder back. Same zero-match behavior as
        `update_dns_record`.

        Returns
        -------
        int
            _The number of records deleted_
        '''
        zone = await self.get_zone(domain)
        records, dropped = dns.delete_records(zone.records, criteria)
        if not dropped:
            logger.warning(f'No record of {domain} matched {dict(criteria)}, rewriting unchanged')
        await self._write_zone(zone, records)
        return dropped

    async def apply_dns_template(
        self,
        domain: str,
        template: dns.TemplateName,
        custom_value: str | None = None,
    ) -> list[dns.DNSRecord]:
        '''
        Apply a service template: existing records sharing a
        `(name, type)` with a template record are replaced, everything
        else is kept.

        Returns
        -------
        list[DNSRecord]
            _The template records written_
        '''
        incoming = dns.build_template(template, domain, custom_value)
        zone = await self.get_zone(domain)
        records, replaced = dns.merge_records(zone.records, incoming)
        logger.info(
            f'Applying {template} to {domain}: {len(incoming)} added, {len(replaced)} replaced'
        )
        await self._write_zone(zone, records)
        return incoming

    async def register_domain(
        self,
        domain: str,
        years: int,
        contact: domains.ContactInfo,
    ) -> domains.RegistrationResult:
        '''
        Register `domain` for `years` with `contact` in every contact role.

        An unavailable domain is not an error: the result comes back with
        `registered=False` and the create command is never sent.

        Raises
        ------
        RemoteApiError
            If the availability check or the create command fails.
        '''
        availability = await self.check_availability(domain)
        if not availability.available:
            logger.info(f'{domain} is not available, skipping registration')
            return domains.RegistrationResult(domain=domain, registered=False)

        params: dict[str, Scalar | None] = {'DomainName': domain, 'Years': years}
        params.update(domains.contact_params(contact))
        result = await self.invoke(CREATE, params)
        return domains.parse_registration(result, domain)

    async def find_expiring_domains(
        self,
        threshold_days: int = 30,
        *,
        today: dt.date | None = None,
    ) -> list[expiry.ExpiringDomain]:
        '''
        Domains on the first 100-domain page expiring within
        `threshold_days`, soonest first.
        '''
        page = await self.list_domains(page=1, page_size=100)
        return expiry.find_expiring(page.domains, threshold_days, today=today)

    async def aclose(self) -> None:
        await self._gateway.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
