"""Shared fixtures."""

import pytest

from s3vault.core.secrets import CredentialVault, StoredCredentials
from s3vault.core.secrets.backends import FileBackend, SystemKeyringBackend
from s3vault.services.storage import ConnectionManager

from fakes import FakeStoreFactory, InMemoryKeyring, UnavailableKeyring


@pytest.fixture
def creds():
    return StoredCredentials(
        access_key_id="AKIAEXAMPLE",
        secret_access_key="wJalrXUtnFEMI/K7MDENG",
        region="us-east-1",
        bucket_name="my-bucket",
    )


@pytest.fixture
def compat_creds():
    return StoredCredentials(
        access_key_id="LINODEKEY",
        secret_access_key="linode-secret",
        region="us-southeast-1",
        bucket_name="other-bucket",
        endpoint_url="https://us-southeast-1.linodeobjects.com",
    )


@pytest.fixture
def memory_keyring():
    return InMemoryKeyring()


@pytest.fixture
def file_backend(tmp_path):
    return FileBackend(tmp_path / ".s3-vault-creds")


@pytest.fixture
def vault(memory_keyring, file_backend):
    return CredentialVault(
        primary=SystemKeyringBackend(keyring_impl=memory_keyring),
        secondary=file_backend,
    )


@pytest.fixture
def unavailable_vault(file_backend):
    return CredentialVault(
        primary=SystemKeyringBackend(keyring_impl=UnavailableKeyring()),
        secondary=file_backend,
    )


@pytest.fixture
def store_factory():
    return FakeStoreFactory()


@pytest.fixture
def manager(store_factory):
    return ConnectionManager(client_factory=store_factory)
