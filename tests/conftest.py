"""
Shared fixtures: registrar credentials, a respx router standing in for the
sandbox endpoint, and a small in-memory registrar that answers the DNS
host commands so read-modify-write operations can be checked end to end.
"""

from typing import Callable
from xml.sax.saxutils import quoteattr

import httpx
import pytest
import respx

from ncdomains.api import SANDBOX_URL, ApiCredentials
from ncdomains.dns import DNSRecord
from ncdomains.registrar import Registrar

NAMESPACE = "http://api.namecheap.com/xml.response"


def api_response(command: str, body: str, *, paging: str = "", warnings: str = "") -> str:
    """Wrap a CommandResponse body in a successful ApiResponse document."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<ApiResponse Status="OK" xmlns="{NAMESPACE}">'
        "<Errors />"
        f"<Warnings>{warnings}</Warnings>"
        f"<RequestedCommand>{command.lower()}</RequestedCommand>"
        f'<CommandResponse Type="{command}">{body}{paging}</CommandResponse>'
        "<Server>PHX01SBAPIEXT05</Server>"
        "<GMTTimeDifference>--4:00</GMTTimeDifference>"
        "<ExecutionTime>0.011</ExecutionTime>"
        "</ApiResponse>"
    )


def error_response(*errors: tuple[str, str]) -> str:
    """An ApiResponse with Status=ERROR and the given (number, text) errors."""
    entries = "".join(
        f"<Error Number={quoteattr(number)}>{text}</Error>" for number, text in errors
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        f'<ApiResponse Status="ERROR" xmlns="{NAMESPACE}">'
        f"<Errors>{entries}</Errors>"
        "<Warnings />"
        "<RequestedCommand />"
        "<Server>PHX01SBAPIEXT05</Server>"
        "<ExecutionTime>0.004</ExecutionTime>"
        "</ApiResponse>"
    )


def host_xml(record: DNSRecord) -> str:
    attrs = {
        "HostId": record.host_id or "",
        "Name": record.name,
        "Type": record.type,
        "Address": record.address,
        "MXPref": "" if record.mx_pref is None else str(record.mx_pref),
        "TTL": "" if record.ttl is None else str(record.ttl),
        "IsActive": "true",
    }
    rendered = " ".join(f"{key}={quoteattr(value)}" for key, value in attrs.items() if value)
    return f"<host {rendered} />"


def hosts_response(domain: str, records: list[DNSRecord], email_type: str = "MX") -> str:
    hosts = "".join(host_xml(record) for record in records)
    return api_response(
        "namecheap.domains.dns.getHosts",
        f'<DomainDNSGetHostsResult Domain="{domain}" EmailType="{email_type}" '
        f'IsUsingOurDNS="true">{hosts}</DomainDNSGetHostsResult>',
    )


def set_hosts_response(domain: str) -> str:
    return api_response(
        "namecheap.domains.dns.setHosts",
        f'<DomainDNSSetHostsResult Domain="{domain}" IsSuccess="true" />',
    )


def records_from_params(params: httpx.QueryParams) -> list[DNSRecord]:
    """Rebuild the record list a setHosts request carries."""
    records = []
    index = 1
    while f"HostName{index}" in params:
        mx_pref = params.get(f"MXPref{index}")
        ttl = params.get(f"TTL{index}")
        records.append(
            DNSRecord(
                name=params[f"HostName{index}"],
                type=params[f"RecordType{index}"],
                address=params[f"Address{index}"],
                mx_pref=int(mx_pref) if mx_pref is not None else None,
                ttl=int(ttl) if ttl is not None else None,
            )
        )
        index += 1
    return records


class FakeRegistrar:
    """
    In-memory zone store answering getHosts/setHosts the way the
    registrar does: setHosts replaces every host and assigns new ids.
    """

    def __init__(self, domain: str, records: list[DNSRecord], email_type: str = "MX"):
        self.domain = domain
        self.email_type = email_type
        self.records: list[DNSRecord] = []
        self.writes: list[httpx.QueryParams] = []
        self.fail_writes_with: str | None = None
        self._next_id = 1
        self._store(records)

    def _store(self, records: list[DNSRecord]) -> None:
        stored = []
        for record in records:
            stored.append(
                DNSRecord(
                    name=record.name,
                    type=record.type,
                    address=record.address,
                    mx_pref=record.mx_pref,
                    ttl=record.ttl,
                    host_id=str(self._next_id),
                )
            )
            self._next_id += 1
        self.records = stored

    def __call__(self, request: httpx.Request) -> httpx.Response:
        params = request.url.params
        command = params["Command"]
        if command == "namecheap.domains.dns.getHosts":
            return httpx.Response(200, text=hosts_response(self.domain, self.records, self.email_type))
        if command == "namecheap.domains.dns.setHosts":
            self.writes.append(params)
            if self.fail_writes_with:
                return httpx.Response(200, text=error_response(("2030166", self.fail_writes_with)))
            self._store(records_from_params(params))
            return httpx.Response(200, text=set_hosts_response(self.domain))
        return httpx.Response(200, text=error_response(("1011150", f"Unexpected command {command}")))

    @property
    def identities(self) -> list[tuple[str, str, str]]:
        return [record.identity for record in self.records]


@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(
        api_user="apiuser",
        api_key="secret-key",
        client_ip="203.0.113.10",
        sandbox=True,
    )


@pytest.fixture
def api_mock():
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def endpoint(api_mock) -> respx.Route:
    """The sandbox endpoint route; tests set its return value or side effect."""
    return api_mock.post(SANDBOX_URL)


@pytest.fixture
async def registrar(credentials, api_mock):
    client = httpx.AsyncClient()
    async with Registrar(credentials, client=client) as registrar:
        yield registrar
    await client.aclose()


@pytest.fixture
def respond(endpoint) -> Callable[[str], respx.Route]:
    """Make the endpoint answer every request with the given XML body."""

    def _respond(body: str, status_code: int = 200) -> respx.Route:
        endpoint.mock(return_value=httpx.Response(status_code, text=body))
        return endpoint

    return _respond


@pytest.fixture
def zone(endpoint) -> Callable[..., FakeRegistrar]:
    """Install a FakeRegistrar for a domain as the endpoint's side effect."""

    def _zone(domain: str, records: list[DNSRecord], email_type: str = "MX") -> FakeRegistrar:
        fake = FakeRegistrar(domain, records, email_type)
        endpoint.mock(side_effect=fake)
        return fake

    return _zone
