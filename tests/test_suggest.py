"""
Suggestion generation and batched availability checks.
"""

import httpx
import pytest

from ncdomains.domains import DomainCheckResult
from ncdomains.suggest import (
    chunked,
    check_in_batches,
    generate_suggestions,
    normalize_keyword,
    partition_results,
    suggest_domains,
)
from tests.conftest import api_response

TAKEN = {"coffee.com", "getcoffee.com"}
PREMIUM = {"coffee.io"}


def answer_checks(request: httpx.Request) -> httpx.Response:
    """Echo every requested domain back: taken, premium or available."""
    nodes = []
    for domain in request.url.params["DomainList"].split(","):
        available = domain not in TAKEN
        premium = domain in PREMIUM
        nodes.append(
            f'<DomainCheckResult Domain="{domain}" Available="{str(available).lower()}" '
            f'IsPremiumName="{str(premium).lower()}" '
            f'PremiumRegistrationPrice="{"99.00" if premium else "0"}" />'
        )
    return httpx.Response(200, text=api_response("namecheap.domains.check", "".join(nodes)))


class TestGenerateSuggestions:

    def test_keyword_is_normalized(self):
        assert normalize_keyword("My Coffee_Shop!") == "mycoffeeshop"

    def test_base_name_comes_first_per_tld(self):
        suggestions = generate_suggestions("coffee", tlds=["com", ".io"])

        assert suggestions[0] == "coffee.com"
        assert suggestions[1:5] == [
            "getcoffee.com",
            "mycoffee.com",
            "thecoffee.com",
            "gocoffee.com",
        ]
        assert "coffee-app.com" in suggestions
        assert "coffee.io" in suggestions
        assert suggestions.index("coffee.io") > suggestions.index("coffee-online.com")

    def test_without_variations(self):
        assert generate_suggestions("coffee", include_variations=False) == [
            "coffee.com",
            "coffee.io",
            "coffee.net",
            "coffee.org",
        ]

    def test_duplicates_are_dropped(self):
        suggestions = generate_suggestions("coffee", tlds=["com", "com"])
        assert len(suggestions) == len(set(suggestions))

    def test_empty_keyword(self):
        with pytest.raises(ValueError):
            generate_suggestions("!!!")


class TestBatches:

    def test_chunked(self):
        assert chunked(["a", "b", "c", "d", "e"], 2) == [["a", "b"], ["c", "d"], ["e"]]

    def test_chunked_rejects_non_positive_size(self):
        with pytest.raises(ValueError):
            chunked(["a"], 0)

    @pytest.mark.asyncio
    async def test_one_command_per_batch_in_order(self, registrar, endpoint):
        endpoint.mock(side_effect=answer_checks)
        names = [f"name{index}.com" for index in range(45)]

        results = await check_in_batches(registrar, names, batch_size=20)

        assert endpoint.call_count == 3
        assert [result.domain for result in results] == names
        assert all(result.available for result in results)


class TestSuggestDomains:

    def test_partition(self):
        report = partition_results([
            DomainCheckResult("a.com", True),
            DomainCheckResult("b.com", False),
            DomainCheckResult("c.com", True, is_premium=True),
        ])

        assert [result.domain for result in report.available] == ["a.com"]
        assert [result.domain for result in report.unavailable] == ["b.com"]
        assert [result.domain for result in report.premium] == ["c.com"]

    @pytest.mark.asyncio
    async def test_report(self, registrar, endpoint):
        endpoint.mock(side_effect=answer_checks)

        report = await suggest_domains(registrar, "coffee", tlds=["com", "io"])

        assert {result.domain for result in report.unavailable} == TAKEN
        assert [result.domain for result in report.premium] == ["coffee.io"]
        assert "mycoffee.com" in {result.domain for result in report.available}
