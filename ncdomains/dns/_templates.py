'''
Record sets for common hosted services. Applying one replaces any
existing record with the same `(name, type)` as a template record and
leaves the rest of the zone alone, see `ncdomains.dns._zone.merge_records`.
'''
from __future__ import annotations

from collections.abc import Callable
from types import MappingProxyType
from typing import Literal, get_args

from ncdomains.dns._records import APEX, DNSRecord

TemplateName = Literal[
    'google-workspace',
    'microsoft-365',
    'vercel',
    'netlify',
    'github-pages',
]

TEMPLATE_NAMES: tuple[str, ...] = get_args(TemplateName)


def _google_workspace(domain: str, custom_value: str | None) -> list[DNSRecord]:
    return [
        DNSRecord(APEX, 'MX', 'aspmx.l.google.com', mx_pref=1),
        DNSRecord(APEX, 'MX', 'alt1.aspmx.l.google.com', mx_pref=5),
        DNSRecord(APEX, 'MX', 'alt2.aspmx.l.google.com', mx_pref=5),
        DNSRecord(APEX, 'MX', 'alt3.aspmx.l.google.com', mx_pref=10),
        DNSRecord(APEX, 'MX', 'alt4.aspmx.l.google.com', mx_pref=10),
        DNSRecord(APEX, 'TXT', 'v=spf1 include:_spf.google.com ~all'),
    ]


def _microsoft_365(domain: str, custom_value: str | None) -> list[DNSRecord]:
    mail_host = domain.replace('.', '-')
    return [
        DNSRecord(APEX, 'MX', f'{mail_host}.mail.protection.outlook.com', mx_pref=0),
        DNSRecord(APEX, 'TXT', 'v=spf1 include:spf.protection.outlook.com -all'),
        DNSRecord('autodiscover', 'CNAME', 'autodiscover.outlook.com'),
    ]


def _vercel(domain: str, custom_value: str | None) -> list[DNSRecord]:
    return [
        DNSRecord(APEX, 'A', '76.76.21.21'),
        DNSRecord('www', 'CNAME', custom_value or 'cname.vercel-dns.com'),
    ]


def _netlify(domain: str, custom_value: str | None) -> list[DNSRecord]:
    return [
        DNSRecord(APEX, 'A', '75.2.60.5'),
        DNSRecord('www', 'CNAME', custom_value or 'apex-loadbalancer.netlify.com'),
    ]


def _github_pages(domain: str, custom_value: str | None) -> list[DNSRecord]:
    return [
        DNSRecord(APEX, 'A', '185.199.108.153'),
        DNSRecord(APEX, 'A', '185.199.109.153'),
        DNSRecord(APEX, 'A', '185.199.110.153'),
        DNSRecord(APEX, 'A', '185.199.111.153'),
        DNSRecord('www', 'CNAME', f"{custom_value or 'username'}.github.io"),
    ]


TEMPLATES: MappingProxyType[str, Callable[[str, str | None], list[DNSRecord]]] = (
    MappingProxyType({
        'google-workspace': _google_workspace,
        'microsoft-365': _microsoft_365,
        'vercel': _vercel,
        'netlify': _netlify,
        'github-pages': _github_pages,
    })
)


def build_template(
    name: TemplateName,
    domain: str,
    custom_value: str | None = None,
) -> list[DNSRecord]:
    '''
    Build the records of template `name` for `domain`.

    Parameters
    ----------
    name : TemplateName
    domain : str
    custom_value : str | None, optional
        The CNAME target for vercel/netlify, or the GitHub user for
        github-pages, by default None

    Returns
    -------
    list[DNSRecord]

    Raises
    ------
    ValueError
        If `name` is not a known template.
    '''
    try:
        factory = TEMPLATES[name]
    except KeyError:
        raise ValueError(
            f"Unknown DNS template '{name}', expected one of: {', '.join(TEMPLATE_NAMES)}"
        ) from None
    return factory(domain, custom_value)
