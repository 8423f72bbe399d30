"""Service for storing uploaded images."""

import time
from enum import Enum
from pathlib import Path, PurePosixPath
from portfolio_app.services.errors import BackendError, BackendUnavailableError


class UploadFolder(str, Enum):
    """Folders uploads are filed under."""

    PROFILE = "profile"
    PROJECTS = "projects"
    PROJECTS_ADDITIONAL = "projects/additional"
    EDUCATION = "education"
    SKILL_ICONS = "skills/icons"


class FileStorage:
    """Interface shared by file storages."""

    available: bool = True

    async def upload(self, folder: UploadFolder, filename: str, content: bytes) -> str:
        """Store a file and return its public URL."""
        raise NotImplementedError


class UnavailableFileStorage(FileStorage):
    """Storage used when the backend is not configured."""

    available = False

    async def upload(self, folder: UploadFolder, filename: str, content: bytes) -> str:
        raise BackendUnavailableError("Backend is not available. Cannot upload file.")


class LocalFileStorage(FileStorage):
    """Stores uploads in a local directory served under ``/uploads``."""

    def __init__(self, bucket_dir: Path, public_base_url: str):
        """
        Initialize local storage.

        Args:
            bucket_dir: Directory uploads are written to
            public_base_url: Base URL the application is reachable at
        """
        self.bucket_dir = Path(bucket_dir)
        self.public_base_url = public_base_url.rstrip("/")

    @staticmethod
    def object_name(folder: UploadFolder, filename: str) -> str:
        """
        Build the stored name for an upload.

        Names are prefixed with the upload time in milliseconds so two
        uploads of the same file never collide. Any directory part of the
        client-supplied filename is dropped.

        Example: ("projects", "shot.png") -> "projects/1700000000000_shot.png"
        """
        basename = PurePosixPath(filename.replace("\\", "/")).name or "upload"
        return f"{folder.value}/{int(time.time() * 1000)}_{basename}"

    async def upload(self, folder: UploadFolder, filename: str, content: bytes) -> str:
        name = self.object_name(folder, filename)
        target = self.bucket_dir / name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise BackendError(f"Failed to store upload {name}: {str(e)}") from e
        return f"{self.public_base_url}/uploads/{name}"
