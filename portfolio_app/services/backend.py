"""Backend configuration and the availability gate."""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings
from pymongo import AsyncMongoClient
from portfolio_app.services.document_store import (
    DocumentStore,
    MongoDocumentStore,
    UnavailableDocumentStore,
)
from portfolio_app.services.file_storage import (
    FileStorage,
    LocalFileStorage,
    UnavailableFileStorage,
)


class BackendSettings(BaseSettings):
    """Backend configuration settings."""

    database_url: str = ""
    database_name: str = ""
    storage_bucket: str = ""
    public_base_url: str = ""
    auth_secret: str = ""
    admin_email: str = ""
    admin_password: str = ""
    admin_password_hash: str = ""
    access_token_expire_minutes: int = 60 * 12

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def missing_settings(self) -> List[str]:
        """
        List the required settings that are empty.

        Returns:
            List[str]: Names of missing settings (empty when complete)
        """
        required = {
            "database_url": self.database_url,
            "database_name": self.database_name,
            "storage_bucket": self.storage_bucket,
            "public_base_url": self.public_base_url,
            "auth_secret": self.auth_secret,
            "admin_email": self.admin_email,
            "admin_password": self.admin_password or self.admin_password_hash,
        }
        return [name for name, value in required.items() if not value]


class Backend:
    """Document store and file storage resolved once at startup."""

    def __init__(self, settings: BackendSettings, store: DocumentStore, files: FileStorage):
        self.settings = settings
        self.store = store
        self.files = files

    @property
    def available(self) -> bool:
        return self.store.available


def create_backend(settings: Optional[BackendSettings] = None) -> Backend:
    """
    Build the backend for this process.

    Availability is decided here and never re-checked: incomplete settings
    or a failing client construction yield the unavailable store and
    storage for the rest of the process lifetime.

    Args:
        settings: Backend settings (read from the environment if None)

    Returns:
        Backend: Connected backend, or the unavailable one
    """
    settings = settings or BackendSettings()

    missing = settings.missing_settings()
    if missing:
        print(f"Warning: Backend configuration is incomplete ({', '.join(missing)}). Using offline mode.")
        return Backend(
            settings,
            UnavailableDocumentStore(f"missing settings: {', '.join(missing)}"),
            UnavailableFileStorage(),
        )

    try:
        client = AsyncMongoClient(settings.database_url)
        store = MongoDocumentStore(client, settings.database_name)
    except Exception as e:
        print(f"Error initializing backend: {e}")
        return Backend(
            settings,
            UnavailableDocumentStore(f"client construction failed: {e}"),
            UnavailableFileStorage(),
        )

    files = LocalFileStorage(Path(settings.storage_bucket), settings.public_base_url)
    print("Backend initialized successfully")
    return Backend(settings, store, files)
