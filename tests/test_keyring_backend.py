"""Tests for the system keyring backend's error classification."""

from unittest.mock import MagicMock, patch

import pytest
from keyring.errors import InitError, NoKeyringError, PasswordDeleteError, PasswordSetError

from s3vault.core.secrets.backends import SystemKeyringBackend
from s3vault.errors import BackendUnavailableError, NotFoundError, SecretStoreError, SerializationError

from fakes import InMemoryKeyring, LockedKeyring, UnavailableKeyring


class TestSystemKeyringBackend:
    """Test SystemKeyringBackend against in-memory keyrings."""

    def test_save_writes_canonical_json_under_fixed_identity(self, creds):
        """The record is stored as JSON under s3-vault/aws-credentials."""
        ring = InMemoryKeyring()
        SystemKeyringBackend(keyring_impl=ring).save(creds)
        assert ring.entries[("s3-vault", "aws-credentials")] == creds.to_json()

    def test_load_round_trip(self, compat_creds):
        backend = SystemKeyringBackend(keyring_impl=InMemoryKeyring())
        backend.save(compat_creds)
        assert backend.load() == compat_creds

    def test_load_missing_entry_raises_not_found(self):
        with pytest.raises(NotFoundError):
            SystemKeyringBackend(keyring_impl=InMemoryKeyring()).load()

    def test_load_corrupt_entry_raises_serialization_error(self):
        ring = InMemoryKeyring()
        ring.entries[("s3-vault", "aws-credentials")] = "not json"
        with pytest.raises(SerializationError):
            SystemKeyringBackend(keyring_impl=ring).load()

    def test_delete_missing_entry_raises_not_found(self):
        with pytest.raises(NotFoundError):
            SystemKeyringBackend(keyring_impl=InMemoryKeyring()).delete()

    def test_refused_delete_of_existing_entry_is_a_store_error(self, creds):
        """A backend refusing to delete a present entry is not treated as missing."""
        ring = MagicMock()
        ring.get_password.return_value = creds.to_json()
        ring.delete_password.side_effect = PasswordDeleteError("User canceled the operation")

        with pytest.raises(SecretStoreError, match="User canceled"):
            SystemKeyringBackend(keyring_impl=ring).delete()

    def test_delete_skips_backend_call_when_entry_is_absent(self):
        ring = MagicMock()
        ring.get_password.return_value = None

        with pytest.raises(NotFoundError):
            SystemKeyringBackend(keyring_impl=ring).delete()

        ring.delete_password.assert_not_called()

    @pytest.mark.parametrize("operation", ["save", "load", "delete"])
    def test_no_keyring_is_unavailable(self, operation, creds):
        """A missing keyring backend is classified as unavailable."""
        backend = SystemKeyringBackend(keyring_impl=UnavailableKeyring())
        args = (creds,) if operation == "save" else ()
        with pytest.raises(BackendUnavailableError):
            getattr(backend, operation)(*args)

    def test_init_error_is_unavailable(self, creds):
        """A secret service that fails to initialise is unavailable."""
        ring = MagicMock()
        ring.set_password.side_effect = InitError("Failed to create the collection: org.freedesktop.secrets")
        with pytest.raises(BackendUnavailableError):
            SystemKeyringBackend(keyring_impl=ring).save(creds)

    def test_locked_keyring_is_a_store_error(self, creds):
        """Failures other than unavailability are surfaced, not recovered."""
        backend = SystemKeyringBackend(keyring_impl=LockedKeyring())
        with pytest.raises(SecretStoreError):
            backend.save(creds)
        with pytest.raises(SecretStoreError):
            backend.load()
        with pytest.raises(SecretStoreError):
            backend.delete()

    def test_set_error_is_a_store_error(self, creds):
        ring = MagicMock()
        ring.set_password.side_effect = PasswordSetError("rejected")
        with pytest.raises(SecretStoreError, match="rejected"):
            SystemKeyringBackend(keyring_impl=ring).save(creds)

    def test_default_keyring_is_used_when_not_injected(self, creds):
        """Without an explicit implementation the process keyring is used."""
        ring = InMemoryKeyring()
        with patch("s3vault.core.secrets.backends.system_keyring.keyring.get_keyring", return_value=ring):
            SystemKeyringBackend().save(creds)
        assert ("s3-vault", "aws-credentials") in ring.entries

    def test_default_keyring_lookup_failure_is_unavailable(self, creds):
        with patch(
            "s3vault.core.secrets.backends.system_keyring.keyring.get_keyring",
            side_effect=NoKeyringError("none"),
        ):
            with pytest.raises(BackendUnavailableError):
                SystemKeyringBackend().save(creds)
