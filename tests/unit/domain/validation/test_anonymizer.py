"""Test salted anonymization."""

import hashlib

from eventguard.domain.validation.anonymizer import anonymize


class TestAnonymize:
    def test_hashes_salt_and_value(self):
        expected = hashlib.sha256(b"salt" + b"user-42").hexdigest()
        assert anonymize("salt", "user-42") == expected

    def test_bytes_and_str_salt_are_equivalent(self):
        assert anonymize(b"salt", "user-42") == anonymize("salt", "user-42")

    def test_different_salts_give_different_digests(self):
        assert anonymize("a", "user-42") != anonymize("b", "user-42")

    def test_blank_values_are_kept(self):
        assert anonymize("salt", "") == ""
        assert anonymize("salt", "   ") == "   "

    def test_is_deterministic(self):
        assert anonymize("salt", "project") == anonymize("salt", "project")
        assert len(anonymize("salt", "project")) == 64
