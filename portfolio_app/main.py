"""FastAPI application for the portfolio site and its admin API."""

from pathlib import Path
from typing import List, Optional, Type
from fastapi import Depends, FastAPI, File, Form, Header, HTTPException, Request, UploadFile, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from portfolio_app.models.content_models import (
    ContactForm,
    ContactMessage,
    Education,
    EducationData,
    Experience,
    ExperienceData,
    Interest,
    InterestData,
    Profile,
    Project,
    ProjectData,
    SectionVisibility,
    Skill,
    SkillCategory,
    SkillCategoryData,
    SkillData,
)
from portfolio_app.models.request_models import (
    LoginRequest,
    MoveCategoryRequest,
    VisibilityUpdateRequest,
)
from portfolio_app.models.response_models import (
    ErrorResponse,
    HealthResponse,
    IdentityResponse,
    NextOrderResponse,
    RootResponse,
    TokenResponse,
    UploadResponse,
)
from portfolio_app.services.auth_service import AuthService, Identity
from portfolio_app.services.backend import create_backend
from portfolio_app.services.content import PortfolioContent
from portfolio_app.services.errors import (
    BackendError,
    BackendUnavailableError,
    InvalidCredentialsError,
    OrderConflictError,
    PortfolioError,
    RecordNotFoundError,
)
from portfolio_app.services.fallback_catalog import get_fallback_catalog
from portfolio_app.services.file_storage import UploadFolder
from portfolio_app.services.ordering import get_next_order
from portfolio_app.services.site_renderer import SiteRenderer
from portfolio_app.services.visibility import get_section_name


API_VERSION = "1.0.0"
SESSION_COOKIE = "portfolio_session"

app = FastAPI(
    title="Portfolio API",
    description="""API and server-rendered pages for a personal portfolio site.

## Features

* **Public site**: Profile, projects, skills, experience, education and interests, with per-section visibility
* **Admin API**: Create, update and delete every kind of content (bearer token required)
* **Offline mode**: When the backend is not configured, default content is served and writes are refused
* **Uploads**: Images for the profile, projects, education and skill icons""",
    version=API_VERSION,
    tags_metadata=[
        {"name": "health", "description": "Health check and status endpoints"},
        {"name": "auth", "description": "Admin sign-in and sign-out"},
        {"name": "profile", "description": "Site owner profile"},
        {"name": "projects", "description": "Portfolio projects"},
        {"name": "skills", "description": "Skills and skill categories"},
        {"name": "experience", "description": "Work experience"},
        {"name": "education", "description": "Education"},
        {"name": "interests", "description": "Personal interests"},
        {"name": "sections", "description": "Section visibility on the public site"},
        {"name": "contact", "description": "Contact form"},
        {"name": "uploads", "description": "Image uploads"},
        {"name": "site", "description": "Server-rendered pages"},
    ]
)

# Initialize services
backend = create_backend()
content = PortfolioContent(backend.store, get_fallback_catalog(), backend.files)
auth_service = AuthService(backend.settings, backend.available)
site_renderer = SiteRenderer()

if backend.available:
    uploads_dir = Path(backend.settings.storage_bucket)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(uploads_dir)), name="uploads")


ERROR_STATUS_CODES = {
    BackendUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    RecordNotFoundError: status.HTTP_404_NOT_FOUND,
    OrderConflictError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    BackendError: status.HTTP_502_BAD_GATEWAY,
}

ERROR_RESPONSES = {
    401: {"description": "Not authenticated", "model": ErrorResponse},
    404: {"description": "Record not found", "model": ErrorResponse},
    502: {"description": "Backend write failed", "model": ErrorResponse},
    503: {"description": "Backend not available", "model": ErrorResponse},
}


@app.exception_handler(PortfolioError)
async def portfolio_error_handler(request: Request, exc: PortfolioError) -> JSONResponse:
    """Map content service errors to HTTP status codes."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def get_content() -> PortfolioContent:
    return content


def get_auth_service() -> AuthService:
    return auth_service


def get_bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Not authenticated")
    return authorization.split(" ", 1)[1]


def get_current_admin(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service)
) -> Identity:
    identity = auth.current_identity(token)
    if identity is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return identity


# ------------------------------
# Health
# ------------------------------

@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Checks that the service is running and reports whether the backend is configured",
    tags=["health"]
)
async def health(content: PortfolioContent = Depends(get_content)):
    return HealthResponse(
        status="ok",
        backend="available" if content.available else "unavailable"
    )


@app.get(
    "/api/v1",
    response_model=RootResponse,
    summary="API information",
    tags=["health"]
)
async def api_root():
    return RootResponse(message="Portfolio API", version=API_VERSION)


# ------------------------------
# Auth
# ------------------------------

@app.post(
    "/api/v1/auth/login",
    response_model=TokenResponse,
    summary="Sign in",
    description="Exchanges the admin email and password for a bearer token",
    tags=["auth"],
    responses={401: ERROR_RESPONSES[401], 503: ERROR_RESPONSES[503]}
)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    token = auth.sign_in(request.email, request.password)
    return TokenResponse(access_token=token)


@app.post(
    "/api/v1/auth/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out",
    description="Revokes the bearer token",
    tags=["auth"]
)
async def logout(
    token: str = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service)
):
    auth.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get(
    "/api/v1/auth/me",
    response_model=IdentityResponse,
    summary="Current identity",
    tags=["auth"],
    responses={401: ERROR_RESPONSES[401]}
)
async def me(identity: Identity = Depends(get_current_admin)):
    return IdentityResponse(email=identity.email, role=identity.role)


# ------------------------------
# Profile
# ------------------------------

@app.get(
    "/api/v1/profile",
    response_model=Profile,
    summary="Get profile",
    description="Returns the stored profile, or the default profile when none can be read",
    tags=["profile"]
)
async def get_profile(content: PortfolioContent = Depends(get_content)):
    return await content.profile.fetch()


@app.put(
    "/api/v1/profile",
    response_model=Profile,
    summary="Update profile",
    description="Replaces the whole profile",
    tags=["profile"],
    responses=ERROR_RESPONSES
)
async def update_profile(
    profile: Profile,
    content: PortfolioContent = Depends(get_content),
    _: Identity = Depends(get_current_admin)
):
    return await content.profile.update(profile)


# ------------------------------
# Skill category ordering
# ------------------------------

@app.get(
    "/api/v1/skill-categories/next-order",
    response_model=NextOrderResponse,
    summary="Suggested order for a new category",
    tags=["skills"]
)
async def next_category_order(content: PortfolioContent = Depends(get_content)):
    categories = await content.skill_categories.fetch_all()
    return NextOrderResponse(order=get_next_order(categories))


@app.post(
    "/api/v1/skill-categories/{category_id}/move",
    response_model=List[SkillCategory],
    summary="Move a category up or down",
    description="""
    Swaps the category's order with its neighbour and returns every category in display order.

    Moving the first category up or the last one down changes nothing. If either
    category's order changed since it was read, nothing is written and 409 is returned.
    """,
    tags=["skills"],
    responses={**ERROR_RESPONSES, 409: {"description": "Order changed concurrently", "model": ErrorResponse}}
)
async def move_category(
    category_id: str,
    request: MoveCategoryRequest,
    content: PortfolioContent = Depends(get_content),
    _: Identity = Depends(get_current_admin)
):
    return await content.category_ordering.move(category_id, request.direction)


# ------------------------------
# Record collections
# ------------------------------

def register_record_routes(
    path: str,
    attr: str,
    record_model: Type[BaseModel],
    data_model: Type[BaseModel],
    tag: str
) -> None:
    """
    Register list/get/add/update/delete endpoints for one record type.

    Args:
        path: URL segment under /api/v1 ("projects")
        attr: Repository attribute on PortfolioContent
        record_model: Stored record model (with id)
        data_model: Editable fields model (without id)
        tag: OpenAPI tag
    """

    @app.get(
        f"/api/v1/{path}",
        response_model=List[record_model],
        summary=f"List {path}",
        description="Returns stored records, or the default records when none can be read",
        tags=[tag]
    )
    async def list_records(content: PortfolioContent = Depends(get_content)):
        return await getattr(content, attr).fetch_all()

    @app.get(
        f"/api/v1/{path}/{{record_id}}",
        response_model=record_model,
        summary=f"Get one of {path}",
        tags=[tag],
        responses={404: ERROR_RESPONSES[404], 503: ERROR_RESPONSES[503]}
    )
    async def get_record(record_id: str, content: PortfolioContent = Depends(get_content)):
        return await getattr(content, attr).fetch_one(record_id)

    @app.post(
        f"/api/v1/{path}",
        response_model=record_model,
        status_code=status.HTTP_201_CREATED,
        summary=f"Add to {path}",
        tags=[tag],
        responses=ERROR_RESPONSES
    )
    async def add_record(
        data: data_model,
        content: PortfolioContent = Depends(get_content),
        _: Identity = Depends(get_current_admin)
    ):
        return await getattr(content, attr).add(data)

    @app.put(
        f"/api/v1/{path}/{{record_id}}",
        response_model=record_model,
        summary=f"Replace one of {path}",
        description="Full replace: send the complete record",
        tags=[tag],
        responses=ERROR_RESPONSES
    )
    async def update_record(
        record_id: str,
        data: data_model,
        content: PortfolioContent = Depends(get_content),
        _: Identity = Depends(get_current_admin)
    ):
        return await getattr(content, attr).update(record_id, data)

    @app.delete(
        f"/api/v1/{path}/{{record_id}}",
        status_code=status.HTTP_204_NO_CONTENT,
        summary=f"Delete one of {path}",
        tags=[tag],
        responses=ERROR_RESPONSES
    )
    async def delete_record(
        record_id: str,
        content: PortfolioContent = Depends(get_content),
        _: Identity = Depends(get_current_admin)
    ):
        await getattr(content, attr).delete(record_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)


register_record_routes("projects", "projects", Project, ProjectData, "projects")
register_record_routes("skills", "skills", Skill, SkillData, "skills")
register_record_routes("skill-categories", "skill_categories", SkillCategory, SkillCategoryData, "skills")
register_record_routes("experiences", "experiences", Experience, ExperienceData, "experience")
register_record_routes("education", "education", Education, EducationData, "education")
register_record_routes("interests", "interests", Interest, InterestData, "interests")


# ------------------------------
# Sections
# ------------------------------

@app.get(
    "/api/v1/sections",
    response_model=List[SectionVisibility],
    summary="List section visibility",
    tags=["sections"]
)
async def list_sections(content: PortfolioContent = Depends(get_content)):
    return await content.sections.fetch_sections()


@app.get(
    "/api/v1/sections/{section_id}",
    response_model=SectionVisibility,
    summary="Get one section's visibility",
    description="Unknown sections and unreadable flags report visible",
    tags=["sections"]
)
async def get_section(section_id: str, content: PortfolioContent = Depends(get_content)):
    visible = await content.sections.fetch_visibility(section_id)
    return SectionVisibility(id=section_id, name=get_section_name(section_id), visible=visible)


@app.put(
    "/api/v1/sections/{section_id}",
    response_model=SectionVisibility,
    summary="Show or hide a section",
    tags=["sections"],
    responses=ERROR_RESPONSES
)
async def set_section_visibility(
    section_id: str,
    request: VisibilityUpdateRequest,
    content: PortfolioContent = Depends(get_content),
    _: Identity = Depends(get_current_admin)
):
    return await content.sections.set_visibility(section_id, request.visible)


# ------------------------------
# Contact & uploads
# ------------------------------

@app.post(
    "/api/v1/contact",
    response_model=ContactMessage,
    status_code=status.HTTP_201_CREATED,
    summary="Send a contact message",
    tags=["contact"],
    responses={502: ERROR_RESPONSES[502], 503: ERROR_RESPONSES[503]}
)
async def submit_contact(form: ContactForm, content: PortfolioContent = Depends(get_content)):
    return await content.messages.submit(form)


@app.post(
    "/api/v1/uploads",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image",
    description="Stores the file under the given folder and returns its public URL",
    tags=["uploads"],
    responses=ERROR_RESPONSES
)
async def upload_file(
    folder: UploadFolder = Form(...),
    file: UploadFile = File(...),
    content: PortfolioContent = Depends(get_content),
    _: Identity = Depends(get_current_admin)
):
    data = await file.read()
    url = await content.files.upload(folder, file.filename or "upload", data)
    return UploadResponse(url=url)


# ------------------------------
# Server-rendered pages
# ------------------------------

@app.get("/", response_class=HTMLResponse, summary="Public home page", tags=["site"])
async def home(content: PortfolioContent = Depends(get_content)):
    return HTMLResponse(await site_renderer.render_home(content))


@app.get("/projects/{project_id}", response_class=HTMLResponse, summary="Project detail page", tags=["site"])
async def project_page(project_id: str, content: PortfolioContent = Depends(get_content)):
    return HTMLResponse(await site_renderer.render_project(content, project_id))


@app.get("/login", response_class=HTMLResponse, summary="Sign-in page", tags=["site"])
async def login_page():
    return HTMLResponse(site_renderer.render_login())


@app.post("/login", summary="Sign in from the sign-in page", tags=["site"])
async def login_form(
    email: str = Form(...),
    password: str = Form(...),
    auth: AuthService = Depends(get_auth_service)
):
    try:
        token = auth.sign_in(email, password)
    except InvalidCredentialsError:
        return HTMLResponse(
            site_renderer.render_login("Invalid email or password."),
            status_code=status.HTTP_401_UNAUTHORIZED
        )
    except BackendUnavailableError:
        return HTMLResponse(
            site_renderer.render_login("Sign-in is unavailable while the backend is not configured."),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )

    response = RedirectResponse("/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(SESSION_COOKIE, token, httponly=True, samesite="lax")
    return response


@app.post("/logout", summary="Sign out from the dashboard", tags=["site"])
async def logout_form(request: Request, auth: AuthService = Depends(get_auth_service)):
    token = request.cookies.get(SESSION_COOKIE)
    if token and auth.current_identity(token) is not None:
        auth.sign_out(token)
    response = RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(SESSION_COOKIE)
    return response


@app.get("/dashboard", response_class=HTMLResponse, summary="Admin dashboard", tags=["site"])
async def dashboard(
    request: Request,
    content: PortfolioContent = Depends(get_content),
    auth: AuthService = Depends(get_auth_service)
):
    identity = auth.current_identity(request.cookies.get(SESSION_COOKIE))
    if identity is None:
        return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    return HTMLResponse(await site_renderer.render_dashboard(content, identity.email))
