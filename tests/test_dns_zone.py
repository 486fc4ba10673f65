"""
Tests for the pure record reconciliation and the setHosts wire mapping.
"""

import pytest

from ncdomains.dns import (
    DNSRecord,
    add_record,
    build_template,
    delete_records,
    host_params,
    matches,
    merge_records,
    split_domain,
    update_records,
)


@pytest.fixture
def records():
    return [
        DNSRecord("a", "A", "1.1.1.1", ttl=1800, host_id="11"),
        DNSRecord("b", "A", "2.2.2.2", ttl=1800, host_id="12"),
        DNSRecord("a", "TXT", "v=spf1 -all", host_id="13"),
        DNSRecord("@", "MX", "mail.example.com", mx_pref=10, host_id="14"),
    ]


class TestSplitDomain:

    def test_simple_domain(self):
        assert split_domain("example.com") == ("example", "com")

    def test_multi_label_suffix_goes_to_tld(self):
        assert split_domain("example.co.uk") == ("example", "co.uk")

    def test_no_dot(self):
        assert split_domain("localhost") == ("localhost", "")


class TestMatches:

    def test_all_criteria_fields_must_match(self, records):
        assert matches(records[0], {"name": "a", "type": "A"})
        assert not matches(records[0], {"name": "a", "type": "TXT"})

    def test_absent_fields_are_wildcards(self, records):
        assert all(matches(record, {}) for record in records)


class TestUpdateRecords:

    def test_only_records_matching_every_criterion_change(self, records):
        updated, matched = update_records(
            records, {"name": "a", "type": "A"}, {"address": "9.9.9.9"}
        )

        assert matched == 1
        assert updated[0] == DNSRecord("a", "A", "9.9.9.9", ttl=1800, host_id="11")
        assert updated[1:] == records[1:]

    def test_updates_overlay_current_fields(self, records):
        updated, _ = update_records(records, {"name": "b"}, {"ttl": 300})

        assert updated[1].address == "2.2.2.2"
        assert updated[1].ttl == 300

    def test_every_match_is_updated(self, records):
        updated, matched = update_records(records, {"type": "A"}, {"ttl": 60})

        assert matched == 2
        assert [record.ttl for record in updated] == [60, 60, None, None]

    def test_zero_matches_returns_set_unchanged(self, records):
        updated, matched = update_records(records, {"name": "zzz"}, {"address": "9.9.9.9"})

        assert matched == 0
        assert updated == records

    def test_numeric_strings_are_coerced(self, records):
        updated, matched = update_records(records, {"mx_pref": "10"}, {"mx_pref": "20"})

        assert matched == 1
        assert updated[3].mx_pref == 20

    def test_unknown_field_is_rejected(self, records):
        with pytest.raises(TypeError, match="priority"):
            update_records(records, {"priority": 10}, {})
        with pytest.raises(TypeError, match="updates"):
            update_records(records, {"name": "a"}, {"value": "x"})

    def test_non_numeric_ttl_names_the_field(self, records):
        with pytest.raises(ValueError, match="'ttl' in updates"):
            update_records(records, {"name": "a"}, {"ttl": "abc"})
        with pytest.raises(ValueError, match="'mx_pref' in criteria"):
            update_records(records, {"mx_pref": "ten"}, {})

    def test_input_is_not_mutated(self, records):
        before = list(records)
        update_records(records, {"name": "a"}, {"address": "9.9.9.9"})
        assert records == before


class TestDeleteRecords:

    def test_exact_match_only(self, records):
        kept, dropped = delete_records(records, {"name": "a", "type": "A"})

        assert dropped == 1
        assert DNSRecord("a", "TXT", "v=spf1 -all", host_id="13") in kept
        assert len(kept) == 3

    def test_address_narrows_the_match(self, records):
        kept, dropped = delete_records(records, {"name": "a", "type": "A", "address": "8.8.8.8"})

        assert dropped == 0
        assert kept == records

    def test_order_is_preserved(self, records):
        kept, _ = delete_records(records, {"name": "b"})
        assert [record.host_id for record in kept] == ["11", "13", "14"]


class TestAddAndMerge:

    def test_add_appends(self, records):
        new = DNSRecord("www", "CNAME", "example.com")
        assert add_record(records, new) == [*records, new]

    def test_merge_replaces_same_name_and_type(self, records):
        incoming = build_template("vercel", "example.com")
        records.append(DNSRecord("@", "A", "203.0.113.5"))

        merged, replaced = merge_records(records, incoming)

        assert replaced == [DNSRecord("@", "A", "203.0.113.5")]
        assert merged[-2:] == incoming
        assert merged[:4] == records[:4]


class TestHostParams:

    def test_indexes_follow_sequence_order(self, records):
        params = host_params("example.com", records)

        assert params["SLD"] == "example"
        assert params["TLD"] == "com"
        assert params["HostName1"] == "a"
        assert params["RecordType2"] == "A"
        assert params["Address3"] == "v=spf1 -all"
        assert params["HostName4"] == "@"
        assert "HostName5" not in params

    def test_optional_fields_only_when_set(self, records):
        params = host_params("example.com", records)

        assert params["TTL1"] == 1800
        assert "MXPref1" not in params
        assert "TTL3" not in params
        assert params["MXPref4"] == 10

    def test_email_type_is_sent_when_given(self, records):
        assert "EmailType" not in host_params("example.com", records)
        assert host_params("example.com", records, email_type="MX")["EmailType"] == "MX"

    def test_empty_set(self):
        assert host_params("example.com", []) == {"SLD": "example", "TLD": "com"}


class TestTemplates:

    def test_unknown_template(self):
        with pytest.raises(ValueError, match="Unknown DNS template"):
            build_template("wordpress", "example.com")

    def test_microsoft_365_mail_host(self):
        records = build_template("microsoft-365", "example.co.uk")
        assert records[0].address == "example-co-uk.mail.protection.outlook.com"

    def test_custom_value(self):
        records = build_template("github-pages", "example.com", "octocat")
        assert records[-1] == DNSRecord("www", "CNAME", "octocat.github.io")
