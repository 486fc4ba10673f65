import dataclasses as dc
from typing import Literal, get_args


RecordType = Literal['A', 'AAAA', 'CNAME', 'MX', 'TXT', 'NS', 'SRV', 'CAA']

RECORD_TYPES: tuple[str, ...] = get_args(RecordType)

APEX = '@'


@dc.dataclass(slots=True, frozen=True)
class DNSRecord:
    '''
    One host record of a zone. `name` is the host label relative to the
    zone, `@` being the apex. `host_id` is assigned by the registrar and
    is only present on records read back from it.
    '''
    name: str
    type: RecordType
    address: str
    mx_pref: int | None = None
    ttl: int | None = None
    host_id: str | None = None

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.name, self.type, self.address)


RECORD_FIELDS: frozenset[str] = frozenset(f.name for f in dc.fields(DNSRecord))


@dc.dataclass(slots=True)
class ZoneRecordSet:
    '''
    Every host record of one domain as returned by a full read, in the
    registrar's order. This is the unit of write: the registrar can only
    replace the whole set.
    '''
    domain: str
    records: list[DNSRecord] = dc.field(default_factory=list)
    email_type: str | None = None
    is_using_our_dns: bool = True

    def __len__(self) -> int:
        return len(self.records)

    def of_type(self, rtype: str) -> list[DNSRecord]:
        return [record for record in self.records if record.type == rtype]
