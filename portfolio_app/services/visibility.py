"""Per-section visibility flags for the public site."""

from typing import Callable, List
from portfolio_app.models.content_models import SectionVisibility
from portfolio_app.services.document_store import COLLECTION_SECTIONS, DocumentStore
from portfolio_app.services.errors import BackendError, BackendUnavailableError


SECTION_NAMES = {
    "profile": "Profile",
    "projects": "Projects",
    "skills": "Skills",
    "experience": "Experience",
    "education": "Education",
    "interests": "Interests",
    "contact": "Contact",
}


def get_section_name(section_id: str) -> str:
    """Display name for a section id, capitalising unknown ids."""
    return SECTION_NAMES.get(section_id) or section_id[:1].upper() + section_id[1:]


class SectionVisibilityService:
    """Reads and writes section visibility.

    Reads fail open: any doubt about a section (backend unavailable,
    missing document, read error) means the section is shown.
    """

    def __init__(self, store: DocumentStore, fallback: Callable[[], List[SectionVisibility]]):
        self.store = store
        self.fallback = fallback

    async def fetch_visibility(self, section_id: str) -> bool:
        """Whether a section is visible. Defaults to True."""
        if not self.store.available:
            return True

        try:
            doc = await self.store.get_document(COLLECTION_SECTIONS, section_id)
        except Exception as e:
            print(f"Warning: Error fetching visibility for section {section_id}: {e}")
            return True

        if doc is None:
            return True
        return bool(doc.get("visible", True))

    async def fetch_sections(self) -> List[SectionVisibility]:
        """All stored sections, or the default sections when none can be read."""
        if not self.store.available:
            print("Warning: Backend is not available. Using default sections data.")
            return self.fallback()

        try:
            docs = await self.store.list_documents(COLLECTION_SECTIONS)
            if not docs:
                return self.fallback()
            return [
                SectionVisibility(
                    id=doc["id"],
                    name=doc.get("name") or get_section_name(doc["id"]),
                    visible=doc.get("visible", True),
                )
                for doc in docs
            ]
        except Exception as e:
            print(f"Warning: Error fetching sections: {e}. Using default data.")
            return self.fallback()

    async def set_visibility(self, section_id: str, visible: bool) -> SectionVisibility:
        """
        Show or hide a section.

        Raises:
            BackendUnavailableError: If the backend is not available
            BackendError: If the write fails
        """
        if not self.store.available:
            raise BackendUnavailableError(
                "Backend is not available. Cannot update section visibility."
            )

        name = get_section_name(section_id)
        try:
            await self.store.set_document(
                COLLECTION_SECTIONS,
                section_id,
                {"visible": visible, "name": name},
                merge=True,
            )
        except BackendError as e:
            print(f"Error updating visibility for section {section_id}: {e}")
            raise
        return SectionVisibility(id=section_id, name=name, visible=visible)
