'''
**ncdomains.domains**
-------------

Domain-level values (availability, account listing, registration) and
the normalizers that map each registrar command's result shape onto them.
'''
from ncdomains.domains._models import (
    ContactInfo,
    DomainCheckResult,
    DomainInfo,
    DomainPage,
    RegistrationResult,
)
from ncdomains.domains._parser import (
    CONTACT_ROLES,
    contact_params,
    parse_check,
    parse_date,
    parse_domain_info,
    parse_domain_list,
    parse_registration,
)

__all__ = [
    'ContactInfo',
    'DomainCheckResult',
    'DomainInfo',
    'DomainPage',
    'RegistrationResult',
    'CONTACT_ROLES',
    'contact_params',
    'parse_check',
    'parse_date',
    'parse_domain_info',
    'parse_domain_list',
    'parse_registration',
]
