"""Wiring of the content repositories over one backend."""

from portfolio_app.models.content_models import (
    Education,
    Experience,
    Interest,
    Project,
    Skill,
    SkillCategory,
)
from portfolio_app.services.document_store import (
    COLLECTION_EDUCATION,
    COLLECTION_EXPERIENCES,
    COLLECTION_INTERESTS,
    COLLECTION_PROJECTS,
    COLLECTION_SKILL_CATEGORIES,
    COLLECTION_SKILLS,
    DocumentStore,
)
from portfolio_app.services.fallback_catalog import FallbackCatalog
from portfolio_app.services.file_storage import FileStorage, UnavailableFileStorage
from portfolio_app.services.ordering import CategoryOrdering
from portfolio_app.services.repositories import (
    ContactMessageRepository,
    ProfileRepository,
    ProjectRepository,
    RecordRepository,
    SkillCategoryRepository,
)
from portfolio_app.services.visibility import SectionVisibilityService


class PortfolioContent:
    """All content services, sharing one store and one default catalog."""

    def __init__(
        self,
        store: DocumentStore,
        catalog: FallbackCatalog,
        files: FileStorage = None
    ):
        self.store = store
        self.catalog = catalog
        self.files = files or UnavailableFileStorage()

        self.profile = ProfileRepository(store, catalog.profile)
        self.projects = ProjectRepository(
            store, COLLECTION_PROJECTS, Project, catalog.projects, "project", "projects"
        )
        self.skills = RecordRepository(
            store, COLLECTION_SKILLS, Skill, catalog.skills, "skill", "skills"
        )
        self.skill_categories = SkillCategoryRepository(
            store,
            COLLECTION_SKILL_CATEGORIES,
            SkillCategory,
            catalog.skill_categories,
            "category",
            "categories",
        )
        self.experiences = RecordRepository(
            store, COLLECTION_EXPERIENCES, Experience, catalog.experiences, "experience", "experiences"
        )
        self.education = RecordRepository(
            store, COLLECTION_EDUCATION, Education, catalog.education, "education", "education"
        )
        self.interests = RecordRepository(
            store, COLLECTION_INTERESTS, Interest, catalog.interests, "interest", "interests"
        )
        self.messages = ContactMessageRepository(store)
        self.sections = SectionVisibilityService(store, catalog.sections)
        self.category_ordering = CategoryOrdering(self.skill_categories)

    @property
    def available(self) -> bool:
        return self.store.available
