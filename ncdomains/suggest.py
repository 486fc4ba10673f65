'''
**ncdomains.suggest**
-----------------

Caller-side helpers for checking many domains: name suggestions built
from a keyword, and `check_in_batches`, which splits a long list into
bulk-check sized chunks and checks them concurrently.
'''
from __future__ import annotations

import asyncio
import dataclasses as dc
import logging
import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from ncdomains.domains import DomainCheckResult

if TYPE_CHECKING:
    from ncdomains.registrar import Registrar

logger = logging.getLogger(__name__)


DEFAULT_TLDS = ('.com', '.io', '.net', '.org')
PREFIXES = ('get', 'my', 'the', 'go')
SUFFIXES = ('app', 'hq', 'io', 'pro')
HYPHENATED = ('-app', '-online')

DEFAULT_BATCH_SIZE = 20

_DISALLOWED = re.compile(r'[^a-z0-9-]')


@dc.dataclass(slots=True)
class SuggestionReport:
    available: list[DomainCheckResult] = dc.field(default_factory=list)
    premium: list[DomainCheckResult] = dc.field(default_factory=list)
    unavailable: list[DomainCheckResult] = dc.field(default_factory=list)


def normalize_keyword(keyword: str) -> str:
    return _DISALLOWED.sub('', keyword.lower())


def generate_suggestions(
    keyword: str,
    tlds: Iterable[str] = DEFAULT_TLDS,
    include_variations: bool = True,
) -> list[str]:
    '''
    Candidate domain names for `keyword`, one group per TLD: the bare
    keyword first, then prefixed, suffixed and hyphenated variations.
    Duplicates are dropped, first occurrence wins.

    Parameters
    ----------
    keyword : str
    tlds : Iterable[str], optional
        With or without the leading dot, by default DEFAULT_TLDS
    include_variations : bool, optional
        by default True

    Returns
    -------
    list[str]

    Raises
    ------
    ValueError
        If nothing usable is left of `keyword`.
    '''
    base = normalize_keyword(keyword)
    if not base:
        raise ValueError(f"Keyword '{keyword}' has no usable characters")

    suggestions: dict[str, None] = {}
    for tld in tlds:
        tld = tld if tld.startswith('.') else f'.{tld}'
        suggestions[f'{base}{tld}'] = None
        if not include_variations:
            continue
        for prefix in PREFIXES:
            suggestions[f'{prefix}{base}{tld}'] = None
        for suffix in (*SUFFIXES, *HYPHENATED):
            suggestions[f'{base}{suffix}{tld}'] = None

    return list(suggestions)


def chunked(items: Sequence[str], size: int) -> list[Sequence[str]]:
    if size <= 0:
        raise ValueError(f'Batch size must be positive, got {size}')
    return [items[start:start + size] for start in range(0, len(items), size)]


async def check_in_batches(
    registrar: Registrar,
    names: Sequence[str],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    concurrency: int = 4,
) -> list[DomainCheckResult]:
    '''
    Check `names` with one bulk command per batch, at most `concurrency`
    commands in flight. Results come back in the order of `names`.
    The first failing batch's error propagates.

    Parameters
    ----------
    registrar : Registrar
    names : Sequence[str]
    batch_size : int, optional
        by default 20
    concurrency : int, optional
        by default 4

    Returns
    -------
    list[DomainCheckResult]
    '''
    batches = chunked(names, batch_size)
    semaphore = asyncio.Semaphore(max(1, concurrency))
    logger.debug(f'Checking {len(names)} domain(s) in {len(batches)} batch(es)')

    async def _check(batch: Sequence[str]) -> list[DomainCheckResult]:
        async with semaphore:
            return await registrar.check_availability_bulk(batch)

    results = await asyncio.gather(*(_check(batch) for batch in batches))
    return [check for batch in results for check in batch]


def partition_results(results: Iterable[DomainCheckResult]) -> SuggestionReport:
    report = SuggestionReport()
    for result in results:
        if not result.available:
            report.unavailable.append(result)
        elif result.is_premium:
            report.premium.append(result)
        else:
            report.available.append(result)
    return report


async def suggest_domains(
    registrar: Registrar,
    keyword: str,
    tlds: Iterable[str] = DEFAULT_TLDS,
    include_variations: bool = True,
) -> SuggestionReport:
    candidates = generate_suggestions(keyword, tlds, include_variations)
    results = await check_in_batches(registrar, candidates)
    return partition_results(results)
