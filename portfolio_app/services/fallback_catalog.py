"""Service for loading the default content catalog from YAML."""

import yaml
from pathlib import Path
from typing import List, Optional, Sequence, TypeVar
from pydantic import BaseModel
from portfolio_app.models.content_models import (
    Education,
    Experience,
    Interest,
    Profile,
    Project,
    SectionVisibility,
    Skill,
    SkillCategory,
)


RecordT = TypeVar("RecordT", bound=BaseModel)


class FallbackData(BaseModel):
    """Complete set of default records."""

    profile: Profile
    projects: List[Project]
    skills: List[Skill]
    skill_categories: List[SkillCategory]
    experiences: List[Experience]
    education: List[Education]
    interests: List[Interest]
    sections: List[SectionVisibility]


class FallbackCatalog:
    """Read-only access to the default records.

    Every accessor hands out deep copies, so nothing a caller does to a
    returned record can leak back into the catalog.
    """

    def __init__(self, data: FallbackData):
        self._data = data

    @staticmethod
    def _copy(records: Sequence[RecordT]) -> List[RecordT]:
        return [record.model_copy(deep=True) for record in records]

    def profile(self) -> Profile:
        return self._data.profile.model_copy(deep=True)

    def projects(self) -> List[Project]:
        return self._copy(self._data.projects)

    def skills(self) -> List[Skill]:
        return self._copy(self._data.skills)

    def skill_categories(self) -> List[SkillCategory]:
        return self._copy(self._data.skill_categories)

    def experiences(self) -> List[Experience]:
        return self._copy(self._data.experiences)

    def education(self) -> List[Education]:
        return self._copy(self._data.education)

    def interests(self) -> List[Interest]:
        return self._copy(self._data.interests)

    def sections(self) -> List[SectionVisibility]:
        return self._copy(self._data.sections)


def load_fallback_catalog(path: Optional[Path] = None) -> FallbackCatalog:
    """
    Load and validate the default records.

    Args:
        path: YAML file to read. Defaults to portfolio_app/data/fallback.yaml

    Returns:
        FallbackCatalog: Validated catalog

    Raises:
        FileNotFoundError: If the YAML file doesn't exist
        ValueError: If the YAML is malformed or fails validation
    """
    if path is None:
        path = Path(__file__).parent.parent / "data" / "fallback.yaml"

    if not path.exists():
        raise FileNotFoundError(f"Fallback data file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML format in {path}: {e}")

    if yaml_data is None:
        raise ValueError("Fallback YAML file is empty")

    try:
        data = FallbackData(**yaml_data)
    except Exception as e:
        raise ValueError(f"Invalid fallback data in {path}: {str(e)}") from e

    return FallbackCatalog(data)


# Singleton instance
_catalog: Optional[FallbackCatalog] = None


def get_fallback_catalog() -> FallbackCatalog:
    """
    Get or create the default catalog singleton.

    Returns:
        FallbackCatalog: The catalog loaded from the bundled YAML file
    """
    global _catalog
    if _catalog is None:
        _catalog = load_fallback_catalog()
    return _catalog
