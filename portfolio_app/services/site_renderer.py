"""Service for rendering the public site and admin pages from templates."""

import asyncio
from pathlib import Path
from typing import Any, Dict, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from portfolio_app.services.content import PortfolioContent
from portfolio_app.services.ordering import (
    get_next_order,
    group_skills_by_category,
    sort_by_end_date,
    sort_categories,
)
from portfolio_app.services.visibility import SECTION_NAMES
from portfolio_app.utils.template_helpers import register_jinja_filters


class SiteRenderer:
    """Render site pages from Jinja2 templates."""

    def __init__(self, template_dir: Path = None):
        """
        Initialize the renderer.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to portfolio_app/templates/
        """
        if template_dir is None:
            app_dir = Path(__file__).parent.parent
            template_dir = app_dir / "templates"

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(['html', 'xml'])
        )

        register_jinja_filters(self.env)

    def render(self, template_name: str, **context: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context)

    async def _visibility(self, content: PortfolioContent) -> Dict[str, bool]:
        section_ids = list(SECTION_NAMES)
        flags = await asyncio.gather(
            *(content.sections.fetch_visibility(section_id) for section_id in section_ids)
        )
        return dict(zip(section_ids, flags))

    async def render_home(self, content: PortfolioContent) -> str:
        """
        Render the public home page.

        Reads run in parallel; hidden sections are left out by the template.
        """
        (
            profile,
            projects,
            skills,
            categories,
            experiences,
            education,
            interests,
            visible,
        ) = await asyncio.gather(
            content.profile.fetch(),
            content.projects.fetch_all(),
            content.skills.fetch_all(),
            content.skill_categories.fetch_all(),
            content.experiences.fetch_all(),
            content.education.fetch_all(),
            content.interests.fetch_all(),
            self._visibility(content),
        )

        return self.render(
            "index.html",
            profile=profile,
            projects=projects,
            grouped_skills=group_skills_by_category(skills, categories),
            experiences=sort_by_end_date(experiences),
            education=sort_by_end_date(education),
            interests=interests,
            visible=visible,
        )

    async def render_project(self, content: PortfolioContent, project_id: str) -> str:
        """Render one project's detail page."""
        project = await content.projects.fetch_one(project_id)
        return self.render("project.html", project=project)

    def render_login(self, error: Optional[str] = None) -> str:
        return self.render("login.html", error=error)

    async def render_dashboard(self, content: PortfolioContent, email: str) -> str:
        """Render the admin overview: record counts and section visibility."""
        (
            projects,
            skills,
            categories,
            experiences,
            education,
            interests,
            sections,
        ) = await asyncio.gather(
            content.projects.fetch_all(),
            content.skills.fetch_all(),
            content.skill_categories.fetch_all(),
            content.experiences.fetch_all(),
            content.education.fetch_all(),
            content.interests.fetch_all(),
            content.sections.fetch_sections(),
        )

        counts = {
            "Projects": len(projects),
            "Skills": len(skills),
            "Skill categories": len(categories),
            "Experience": len(experiences),
            "Education": len(education),
            "Interests": len(interests),
        }
        return self.render(
            "dashboard.html",
            email=email,
            available=content.available,
            counts=counts,
            categories=sort_categories(categories),
            next_order=get_next_order(categories),
            sections=sections,
        )
