"""Tests for the status policy and cache freshness rules."""

import pytest

from statusmark_store.models import RevisionEntry
from statusmark_store.policy import DEFAULT_POLICY, FOREVER, StatusPolicy, StatusStyle, is_valid

LAST = 1_700_000_000


class TestIsValid:
    @pytest.mark.parametrize("status", ["success", "failure"])
    def test_final_statuses_never_expire(self, status):
        entry = RevisionEntry(status, LAST)
        assert is_valid(entry, LAST)
        assert is_valid(entry, LAST + 10**9)

    def test_pending_valid_within_ten_seconds(self):
        entry = RevisionEntry("pending", LAST)
        assert is_valid(entry, LAST + 9)
        assert not is_valid(entry, LAST + 10)
        assert not is_valid(entry, LAST + 11)

    def test_unknown_valid_within_thirty_seconds(self):
        entry = RevisionEntry("", LAST)
        assert is_valid(entry, LAST)
        assert is_valid(entry, LAST + 29)
        assert not is_valid(entry, LAST + 30)

    def test_absent_entry_is_stale(self):
        assert not is_valid(RevisionEntry(), LAST)

    def test_unrecognized_status_uses_unknown_ttl(self):
        entry = RevisionEntry("error", LAST)
        assert is_valid(entry, LAST + 29)
        assert not is_valid(entry, LAST + 30)

    def test_alternate_policy_is_honoured(self):
        policy = DEFAULT_POLICY.with_ttls({"pending": 60, "success": 5})
        assert is_valid(RevisionEntry("pending", LAST), LAST + 59, policy)
        assert not is_valid(RevisionEntry("success", LAST), LAST + 5, policy)


class TestStatusPolicy:
    def test_default_glyphs(self):
        assert DEFAULT_POLICY.lookup("").glyph == "?"
        assert DEFAULT_POLICY.lookup("pending").glyph == "●"
        assert DEFAULT_POLICY.lookup("failure").glyph == "✗"
        assert DEFAULT_POLICY.lookup("success").glyph == "✓"

    def test_default_colors(self):
        assert DEFAULT_POLICY.lookup("").color is None
        assert DEFAULT_POLICY.lookup("pending").color == "yellow"
        assert DEFAULT_POLICY.lookup("failure").color == "red"
        assert DEFAULT_POLICY.lookup("success").color == "green"

    def test_lookup_falls_back_to_unknown(self):
        assert DEFAULT_POLICY.lookup("error") == DEFAULT_POLICY.lookup("")
        assert DEFAULT_POLICY.lookup("SUCCESS") == DEFAULT_POLICY.lookup("")

    def test_with_ttls_does_not_mutate_original(self):
        DEFAULT_POLICY.with_ttls({"pending": FOREVER})
        assert DEFAULT_POLICY.ttl("pending") == 10

    def test_with_ttls_rejects_unknown_status(self):
        with pytest.raises(ValueError):
            DEFAULT_POLICY.with_ttls({"error": 5})

    def test_policy_requires_unknown_style(self):
        with pytest.raises(ValueError):
            StatusPolicy({"success": StatusStyle("✓", "green", FOREVER)})
