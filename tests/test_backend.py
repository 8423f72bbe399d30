"""Tests for backend configuration, default catalog and file storage."""

from pathlib import Path
import pytest
from portfolio_app.services.backend import BackendSettings, create_backend
from portfolio_app.services.errors import BackendUnavailableError
from portfolio_app.services.fallback_catalog import load_fallback_catalog
from portfolio_app.services.file_storage import LocalFileStorage, UnavailableFileStorage, UploadFolder


def test_missing_settings_make_backend_unavailable():
    settings = BackendSettings(_env_file=None, database_url="mongodb://localhost:27017")

    backend = create_backend(settings)

    assert backend.available is False
    assert isinstance(backend.files, UnavailableFileStorage)
    assert "auth_secret" in settings.missing_settings()


def test_password_hash_satisfies_password_setting(settings):
    settings.admin_password = ""
    settings.admin_password_hash = "hash"

    assert settings.missing_settings() == []


def test_complete_settings_make_backend_available(settings):
    backend = create_backend(settings)

    assert backend.available is True
    assert isinstance(backend.files, LocalFileStorage)


def test_default_catalog_contents(catalog):
    assert catalog.profile().name == "John Doe"
    assert [c.order for c in catalog.skill_categories()] == [1, 2, 3, 4, 5, 6]
    assert {s.id for s in catalog.sections()} == {
        "profile", "projects", "skills", "experience", "education", "interests", "contact"
    }
    assert catalog.experiences()[0].end_date is None


def test_catalog_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_fallback_catalog(tmp_path / "missing.yaml")


def test_catalog_invalid_data(tmp_path):
    path = tmp_path / "fallback.yaml"
    path.write_text("profile: {name: Only a name}\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_fallback_catalog(path)


def test_object_name_is_timestamped_basename():
    name = LocalFileStorage.object_name(UploadFolder.PROJECTS_ADDITIONAL, "../../etc/shot.png")

    folder, _, filename = name.rpartition("/")
    stamp, _, basename = filename.partition("_")
    assert folder == "projects/additional"
    assert stamp.isdigit()
    assert basename == "shot.png"


@pytest.mark.asyncio
async def test_local_upload_returns_public_url(tmp_path):
    storage = LocalFileStorage(tmp_path, "http://site.example/")

    url = await storage.upload(UploadFolder.PROFILE, "me.jpg", b"jpeg")

    assert url.startswith("http://site.example/uploads/profile/")
    stored = tmp_path / url.split("/uploads/", 1)[1]
    assert Path(stored).read_bytes() == b"jpeg"


@pytest.mark.asyncio
async def test_unavailable_storage_refuses_uploads():
    with pytest.raises(BackendUnavailableError):
        await UnavailableFileStorage().upload(UploadFolder.PROFILE, "me.jpg", b"jpeg")
