'''
Record reconciliation for a registrar that can only replace a zone's
whole record set.

Every mutation is computed here as a pure function from the record set
most recently read to the record set to write back. Records the change
does not target pass through untouched and keep their order.
'''
from __future__ import annotations

import dataclasses as dc
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ncdomains.dns._records import RECORD_FIELDS, DNSRecord

logger = logging.getLogger(__name__)

Criteria = Mapping[str, Any]

_INT_FIELDS = ('mx_pref', 'ttl')


def normalize_fields(fields: Criteria, kind: str = 'criteria') -> dict[str, Any]:
    '''
    Check that every key names a DNSRecord field and coerce numeric
    fields given as strings, so `{'ttl': '1800'}` matches a record read
    back with `ttl=1800`.

    Parameters
    ----------
    fields : Criteria
    kind : str, optional
        Used in the error message, by default 'criteria'

    Returns
    -------
    dict[str, Any]

    Raises
    ------
    TypeError
        If a key is not a DNSRecord field.
    ValueError
        If `mx_pref` or `ttl` is a string that is not an integer.
    '''
    unknown = set(fields) - RECORD_FIELDS
    if unknown:
        raise TypeError(
            f"Unknown DNS record field(s) in {kind}: {', '.join(sorted(unknown))}"
        )

    normalized = dict(fields)
    for name in _INT_FIELDS:
        value = normalized.get(name)
        if isinstance(value, str) and value.strip():
            try:
                normalized[name] = int(value)
            except ValueError:
                raise ValueError(
                    f"DNS record field '{name}' in {kind} must be an integer, got '{value}'"
                ) from None
    return normalized


def matches(record: DNSRecord, criteria: Criteria) -> bool:
    '''
    True when every field present in `criteria` equals the record's
    value. Fields absent from `criteria` are wildcards, so empty
    criteria match every record.
    '''
    return all(getattr(record, name) == value for name, value in criteria.items())


def add_record(records: Sequence[DNSRecord], record: DNSRecord) -> list[DNSRecord]:
    return [*records, record]


def update_records(
    records: Iterable[DNSRecord],
    criteria: Criteria,
    updates: Criteria,
) -> tuple[list[DNSRecord], int]:
    '''
    Replace every record matching `criteria` with its own fields
    overlaid by `updates`.

    Parameters
    ----------
    records : Iterable[DNSRecord]
    criteria : Criteria
    updates : Criteria

    Returns
    -------
    tuple[list[DNSRecord], int]
        _The new record set and how many records matched_
    '''
    criteria = normalize_fields(criteria)
    updates = normalize_fields(updates, kind='updates')
    if not criteria:
        logger.warning('Empty update criteria match every record in the zone')

    result: list[DNSRecord] = []
    matched = 0
    for record in records:
        if matches(record, criteria):
            matched += 1
            result.append(dc.replace(record, **updates))
        else:
            result.append(record)
    return result, matched


def delete_records(
    records: Sequence[DNSRecord],
    criteria: Criteria,
) -> tuple[list[DNSRecord], int]:
    '''
    Drop every record matching `criteria`.

    Returns
    -------
    tuple[list[DNSRecord], int]
        _The remaining records and how many were dropped_
    '''
    criteria = normalize_fields(criteria)
    if not criteria:
        logger.warning('Empty delete criteria match every record in the zone')

    kept = [record for record in records if not matches(record, criteria)]
    return kept, len(records) - len(kept)


def merge_records(
    records: Iterable[DNSRecord],
    incoming: Sequence[DNSRecord],
) -> tuple[list[DNSRecord], list[DNSRecord]]:
    '''
    Append `incoming` after dropping existing records that share a
    `(name, type)` pair with any incoming record.

    Returns
    -------
    tuple[list[DNSRecord], list[DNSRecord]]
        _The new record set and the records that were replaced_
    '''
    taken = {(record.name, record.type) for record in incoming}
    kept: list[DNSRecord] = []
    replaced: list[DNSRecord] = []
    for record in records:
        if (record.name, record.type) in taken:
            replaced.append(record)
        else:
            kept.append(record)
    return [*kept, *incoming], replaced
