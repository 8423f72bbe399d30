"""Helper functions for Jinja2 templates."""

from datetime import date
from typing import NamedTuple, Optional
from jinja2 import Environment
from portfolio_app.models.content_models import Skill, SkillIcon


DEFAULT_SKILL_ICON = SkillIcon.CODE

SKILL_ICON_GLYPHS = {
    SkillIcon.CODE: "💻",
    SkillIcon.DATABASE: "🗄️",
    SkillIcon.SERVER: "🖥️",
    SkillIcon.GLOBE: "🌐",
    SkillIcon.CPU: "🔧",
    SkillIcon.GIT_BRANCH: "🔀",
    SkillIcon.LAYERS: "📦",
    SkillIcon.WORKFLOW: "🔄",
    SkillIcon.BRAIN_CIRCUIT: "🧠",
    SkillIcon.USERS: "👥",
}


class RenderedIcon(NamedTuple):
    """How a skill's icon is drawn: an uploaded image or a built-in glyph."""

    image_url: Optional[str]
    builtin: Optional[SkillIcon]

    @property
    def glyph(self) -> str:
        return SKILL_ICON_GLYPHS[self.builtin] if self.builtin else ""


def resolve_skill_icon(skill: Skill) -> RenderedIcon:
    """
    Pick the icon a skill renders with.

    An uploaded ``icon_url`` wins over the built-in ``icon``; a skill with
    neither gets the default icon.
    """
    if skill.icon_url:
        return RenderedIcon(image_url=skill.icon_url, builtin=None)
    return RenderedIcon(image_url=None, builtin=skill.icon or DEFAULT_SKILL_ICON)


def format_month_year(value: Optional[str]) -> str:
    """
    Format an ISO date as "Mon YYYY".

    Example: "2020-01-15" -> "Jan 2020". Empty or unparseable values are
    returned unchanged.
    """
    if not value:
        return ""
    try:
        return date.fromisoformat(value[:10]).strftime("%b %Y")
    except ValueError:
        return value


def format_period(start_date: Optional[str], end_date: Optional[str]) -> str:
    """
    Format a date range, showing "Present" for an ongoing entry.

    Example: ("2020-01-01", None) -> "Jan 2020 - Present"
    """
    end = format_month_year(end_date) if end_date else "Present"
    return f"{format_month_year(start_date)} - {end}"


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters['month_year'] = format_month_year
    env.filters['skill_icon'] = resolve_skill_icon
    env.globals['format_period'] = format_period
