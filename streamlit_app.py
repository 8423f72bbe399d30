"""Streamlit admin dashboard for the portfolio API."""

import os
from typing import Any, Dict, List, Optional
import httpx
import streamlit as st
from portfolio_app.models.content_models import SkillIcon
from portfolio_app.services.api_client import PortfolioApiClient
from portfolio_app.services.dashboard_state import CategoryList, OptimisticList, UploadCache
from portfolio_app.services.ordering import MoveDirection, sort_by_end_date


# Configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")

# (field key, label, kind); kinds: text, textarea, list, lines, int, end_date, icon, category, image:<folder>
RECORD_FORMS: Dict[str, Dict[str, Any]] = {
    "projects": {
        "title": "Projects",
        "label": "title",
        "fields": [
            ("title", "Title", "text"),
            ("description", "Short description", "textarea"),
            ("technologies", "Technologies (comma separated)", "list"),
            ("imageUrl", "Cover image", "image:projects"),
            ("demoUrl", "Demo URL", "text"),
            ("githubUrl", "GitHub URL", "text"),
            ("detailedDescription", "Detailed description", "textarea"),
            ("role", "Role", "text"),
            ("contribution", "Contribution", "textarea"),
            ("features", "Features (one per line)", "lines"),
            ("additionalImages", "Additional images (one URL per line)", "lines"),
            ("challenges", "Challenges", "textarea"),
            ("duration", "Duration", "text"),
        ],
    },
    "skills": {
        "title": "Skills",
        "label": "name",
        "fields": [
            ("name", "Name", "text"),
            ("category", "Category", "category"),
            ("icon", "Icon", "icon"),
            ("iconUrl", "Custom icon (overrides the icon above)", "image:skills/icons"),
            ("order", "Order within category", "int"),
        ],
    },
    "experiences": {
        "title": "Experience",
        "label": "position",
        "fields": [
            ("company", "Company", "text"),
            ("position", "Position", "text"),
            ("location", "Location", "text"),
            ("startDate", "Start date (YYYY-MM-DD)", "text"),
            ("endDate", "End date (YYYY-MM-DD, empty if current)", "end_date"),
            ("description", "Description", "textarea"),
        ],
    },
    "education": {
        "title": "Education",
        "label": "institution",
        "fields": [
            ("institution", "Institution", "text"),
            ("degree", "Degree", "text"),
            ("field", "Field of study", "text"),
            ("location", "Location", "text"),
            ("startDate", "Start date (YYYY-MM-DD)", "text"),
            ("endDate", "End date (YYYY-MM-DD, empty if current)", "end_date"),
            ("description", "Description", "textarea"),
            ("logoUrl", "Logo", "image:education"),
        ],
    },
    "interests": {
        "title": "Interests",
        "label": "name",
        "fields": [
            ("name", "Name", "text"),
            ("description", "Description", "textarea"),
            ("icon", "Icon (emoji)", "text"),
        ],
    },
}

PROFILE_FIELDS = [
    ("name", "Name", "text"),
    ("title", "Title", "text"),
    ("bio", "Bio", "textarea"),
    ("email", "Email", "text"),
    ("phone", "Phone", "text"),
    ("location", "Location", "text"),
    ("github", "GitHub", "text"),
    ("linkedin", "LinkedIn", "text"),
    ("website", "Website", "text"),
    ("imageUrl", "Profile image", "image:profile"),
]

# Page configuration
st.set_page_config(
    page_title="Portfolio Dashboard",
    page_icon="🗂️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def get_client() -> PortfolioApiClient:
    if "client" not in st.session_state:
        st.session_state.client = PortfolioApiClient(API_BASE_URL)
    return st.session_state.client


def get_list(collection: str) -> OptimisticList:
    """Get (and load on first use) the dashboard's local copy of a collection."""
    key = f"list_{collection}"
    if key not in st.session_state:
        client = get_client()
        if collection == "skill-categories":
            records = CategoryList(lambda: client.list_records("skill-categories"))
        else:
            records = OptimisticList(lambda: client.list_records(collection))
        records.refresh()
        st.session_state[key] = records
    return st.session_state[key]


def show_error(action: str, error: Exception) -> None:
    if isinstance(error, httpx.HTTPStatusError):
        try:
            detail = error.response.json().get("detail", str(error))
        except ValueError:
            detail = str(error)
        st.error(f"Could not {action}: {detail}")
    else:
        st.error(f"Could not {action}: {str(error)}")


def render_field(prefix: str, key: str, label: str, kind: str, value: Any) -> Any:
    """
    Render one form input and return the value to save.

    Args:
        prefix: Unique widget key prefix for the form
        key: Record field name
        label: Input label
        kind: Input kind (see RECORD_FORMS)
        value: Current value

    Returns:
        The value in the shape the API expects
    """
    widget_key = f"{prefix}_{key}"

    if kind == "textarea":
        return st.text_area(label, value=value or "", key=widget_key)
    if kind == "list":
        text = st.text_input(label, value=", ".join(value or []), key=widget_key)
        return [item.strip() for item in text.split(",") if item.strip()]
    if kind == "lines":
        text = st.text_area(label, value="\n".join(value or []), key=widget_key)
        return [line.strip() for line in text.splitlines() if line.strip()]
    if kind == "int":
        return int(st.number_input(label, value=int(value or 1), step=1, key=widget_key))
    if kind == "end_date":
        text = st.text_input(label, value=value or "", key=widget_key)
        return text.strip() or None
    if kind == "icon":
        options = [""] + [icon.value for icon in SkillIcon]
        current = value if value in options else ""
        choice = st.selectbox(label, options, index=options.index(current), key=widget_key)
        return choice or None
    if kind == "category":
        names = [c["name"] for c in get_list("skill-categories").items]
        if value and value not in names:
            names.append(value)
        if not names:
            return st.text_input(label, value=value or "", key=widget_key)
        index = names.index(value) if value in names else 0
        return st.selectbox(label, names, index=index, key=widget_key)
    if kind.startswith("image:"):
        url = st.text_input(f"{label} URL", value=value or "", key=widget_key)
        st.file_uploader(f"Upload {label.lower()}", key=f"{widget_key}_file")
        return url or None
    return st.text_input(label, value=value or "", key=widget_key)


def get_upload_cache() -> UploadCache:
    if "upload_cache" not in st.session_state:
        st.session_state.upload_cache = UploadCache()
    return st.session_state.upload_cache


def apply_uploads(prefix: str, fields: List[Any], data: Dict[str, Any]) -> bool:
    """
    Upload the files chosen in a submitted form and put their URLs in ``data``.

    Each chosen file is uploaded once; later reruns reuse its URL.

    Returns:
        bool: False if an upload failed and the form should not be saved
    """
    for key, label, kind in fields:
        if not kind.startswith("image:"):
            continue
        field = f"{prefix}_{key}"
        uploaded = st.session_state.get(f"{field}_file")
        if uploaded is None:
            continue
        folder = kind.split(":", 1)[1]
        try:
            data[key] = get_upload_cache().upload_once(
                field,
                uploaded.file_id,
                lambda: get_client().upload(folder, uploaded.name, uploaded.getvalue()),
            )
        except httpx.HTTPError as e:
            show_error(f"upload the {label.lower()}", e)
            return False
    return True


def render_record_form(prefix: str, fields: List[Any], record: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Render a record form; returns the submitted fields, or None if not submitted."""
    record = record or {}
    with st.form(prefix):
        data = {
            key: render_field(prefix, key, label, kind, record.get(key))
            for key, label, kind in fields
        }
        submitted = st.form_submit_button("Save")
    if not submitted or not apply_uploads(prefix, fields, data):
        return None
    return data


def render_login() -> None:
    st.markdown("## Admin sign in")
    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        try:
            get_client().login(email, password)
            st.rerun()
        except httpx.HTTPError as e:
            show_error("sign in", e)


def render_collection(collection: str) -> None:
    """Manage one record collection: list, add, edit and delete."""
    config = RECORD_FORMS[collection]
    client = get_client()
    records = get_list(collection)

    st.markdown(f"## {config['title']}")

    items = records.items
    if collection in ("experiences", "education"):
        items = sort_by_end_date(items, end_date=lambda r: r.get("endDate"))

    with st.expander(f"Add {config['title'].lower()}"):
        data = render_record_form(f"add_{collection}", config["fields"], None)
        if data is not None:
            try:
                records.add(data, lambda d: client.add_record(collection, d))
                st.success("Added")
                st.rerun()
            except httpx.HTTPError as e:
                show_error("add the record", e)

    for record in items:
        with st.expander(str(record.get(config["label"], record.get("id")))):
            data = render_record_form(f"edit_{collection}_{record['id']}", config["fields"], record)
            if data is not None:
                try:
                    records.update(record["id"], data, lambda d: client.update_record(collection, record["id"], d))
                    st.success("Saved")
                    st.rerun()
                except httpx.HTTPError as e:
                    show_error("save the record", e)
            if st.button("Delete", key=f"delete_{collection}_{record['id']}"):
                try:
                    records.remove(record["id"], lambda: client.delete_record(collection, record["id"]))
                    st.rerun()
                except httpx.HTTPError as e:
                    show_error("delete the record", e)


def render_categories() -> None:
    """Order, add, rename and delete skill categories."""
    client = get_client()
    categories = get_list("skill-categories")

    st.markdown("## Skill categories")
    st.caption("Categories with lower order numbers appear first in the skills section.")

    with st.expander("Add category"):
        with st.form("add_category"):
            name = st.text_input("Name")
            order = st.number_input("Display order", value=categories.next_order(), step=1)
            submitted = st.form_submit_button("Save")
        if submitted:
            data = {"name": name, "order": int(order)}
            try:
                categories.add(data, lambda d: client.add_record("skill-categories", d))
                st.rerun()
            except httpx.HTTPError as e:
                show_error("add the category", e)

    items = categories.items
    for index, category in enumerate(items):
        cols = st.columns([6, 1, 1, 1])
        cols[0].markdown(f"**{category['name']}** · order {category['order']}")
        if cols[1].button("↑", key=f"up_{category['id']}", disabled=index == 0):
            try:
                categories.move(category["id"], MoveDirection.UP, lambda: client.move_category(category["id"], "up"))
                st.rerun()
            except httpx.HTTPError as e:
                show_error("move the category", e)
        if cols[2].button("↓", key=f"down_{category['id']}", disabled=index == len(items) - 1):
            try:
                categories.move(category["id"], MoveDirection.DOWN, lambda: client.move_category(category["id"], "down"))
                st.rerun()
            except httpx.HTTPError as e:
                show_error("move the category", e)
        if cols[3].button("🗑", key=f"delete_category_{category['id']}"):
            try:
                categories.remove(category["id"], lambda: client.delete_record("skill-categories", category["id"]))
                st.rerun()
            except httpx.HTTPError as e:
                show_error("delete the category", e)


def render_profile() -> None:
    client = get_client()
    st.markdown("## Profile")
    profile = client.get_profile()
    data = render_record_form("profile", PROFILE_FIELDS, profile)
    if data is not None:
        data = {key: value if value is not None else "" for key, value in data.items()}
        try:
            client.update_profile(data)
            st.success("Profile saved")
        except httpx.HTTPError as e:
            show_error("save the profile", e)


def render_settings() -> None:
    """Section visibility toggles."""
    client = get_client()
    sections = get_list("sections")

    st.markdown("## Section visibility")
    for section in sections.items:
        visible = st.toggle(section["name"], value=section["visible"], key=f"section_{section['id']}")
        if visible != section["visible"]:
            try:
                sections.update(
                    section["id"],
                    {"visible": visible},
                    lambda d: client.set_section_visibility(section["id"], d["visible"]),
                )
                st.rerun()
            except httpx.HTTPError as e:
                show_error("update the section", e)


def main():
    """Main Streamlit app."""
    client = get_client()

    if not client.token:
        render_login()
        return

    try:
        backend = client.health().get("backend")
    except httpx.HTTPError:
        backend = "unknown"
    if backend != "available":
        st.warning("The backend is not configured: default content is shown and changes cannot be saved.")

    with st.sidebar:
        st.markdown("### Dashboard")
        page = st.radio(
            "Section",
            ["Profile", "Projects", "Skills", "Skill categories", "Experience", "Education", "Interests", "Settings"],
        )
        if st.button("Sign out"):
            try:
                client.logout()
            except httpx.HTTPError as e:
                show_error("sign out", e)
            for key in list(st.session_state.keys()):
                del st.session_state[key]
            st.rerun()

    if page == "Profile":
        render_profile()
    elif page == "Projects":
        render_collection("projects")
    elif page == "Skills":
        render_collection("skills")
    elif page == "Skill categories":
        render_categories()
    elif page == "Experience":
        render_collection("experiences")
    elif page == "Education":
        render_collection("education")
    elif page == "Interests":
        render_collection("interests")
    else:
        render_settings()


if __name__ == "__main__":
    main()
