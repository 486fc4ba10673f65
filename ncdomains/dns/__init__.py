'''
**ncdomains.dns**
-------------

DNS host records and the whole-zone reconciliation used to add, update
and delete single records on a registrar that can only replace a zone's
full record set. See: `ncdomains.dns._zone` for the reconciliation and
`ncdomains.dns._parser` for the wire mapping.
'''
from ncdomains.dns._records import (
    APEX,
    RECORD_FIELDS,
    RECORD_TYPES,
    DNSRecord,
    RecordType,
    ZoneRecordSet,
)
from ncdomains.dns._parser import (
    host_params,
    parse_host,
    parse_zone,
    split_domain,
)
from ncdomains.dns._zone import (
    Criteria,
    add_record,
    delete_records,
    matches,
    merge_records,
    normalize_fields,
    update_records,
)
from ncdomains.dns._templates import (
    TEMPLATE_NAMES,
    TEMPLATES,
    TemplateName,
    build_template,
)

__all__ = [
    'APEX',
    'RECORD_FIELDS',
    'RECORD_TYPES',
    'DNSRecord',
    'RecordType',
    'ZoneRecordSet',
    'host_params',
    'parse_host',
    'parse_zone',
    'split_domain',
    'Criteria',
    'add_record',
    'delete_records',
    'matches',
    'merge_records',
    'normalize_fields',
    'update_records',
    'TEMPLATE_NAMES',
    'TEMPLATES',
    'TemplateName',
    'build_template',
]
