"""FastAPI application entrypoint and HTTP controllers.

This module defines the pages and JSON endpoints of the Skilltrack-365
catalog site. Controllers are intentionally thin: they build a view or
delegate to a service, then render a template or return JSON.

Endpoints implemented:
- GET /                         home page (services grid + assessments)
- GET /services/{slug}          service detail
- GET /api/services             active services as JSON
- GET /assessments              assessments catalog
- POST /assessments/{id}/start  assessment start action
- GET /cloud-sandbox            sandbox playgrounds
- GET /cloud-sandbox/{slug}     sandbox detail
- POST /auth/register
- POST /auth/login
- GET/POST /admin/services, PUT/DELETE /admin/services/{id}
- GET /health
"""

from fastapi import FastAPI, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session
import json
import logging
import time
import uuid
from .database import engine, create_db_and_tables, get_session
from . import services, repositories, models
from .auth import require_admin
from .components.catalog import AssessmentsCatalog, CloudSandboxCatalog
from .components.icons import resolve_icon
from .components.service_list import ServiceListView
from .config import settings
from .rendering import render_template
from .schemas import RegisterIn, ServiceIn, ServiceOut, ServiceUpdate, TokenOut
from .utils.table_source import TableSource, build_table_source

app = FastAPI(title="Skilltrack-365 Catalog")
logger = logging.getLogger("skilltrack.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)

if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

create_db_and_tables()
_table_source = build_table_source(settings, engine)


def get_table_source() -> TableSource:
    """Dependency returning the configured services table source."""
    return _table_source


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    context = {
        "request_id": req_id,
        "path": request.url.path,
        "method": request.method,
        "client": request.client.host if request.client else "unknown",
    }
    try:
        response: Response = await call_next(request)
    except Exception:
        context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception("request_failed %s", json.dumps(context, ensure_ascii=True))
        raise
    response.headers["X-Request-ID"] = req_id
    context["status_code"] = response.status_code
    context["duration_ms"] = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info("request_done %s", json.dumps(context, ensure_ascii=True))
    return response


async def _load_services(source: TableSource) -> ServiceListView:
    view = ServiceListView(
        source,
        table=settings.SERVICES_TABLE,
        skeleton_count=settings.SKELETON_COUNT,
        timeout=settings.FETCH_TIMEOUT_SECONDS,
    )
    try:
        await view.load()
    finally:
        view.unmount()
    return view


@app.get("/", response_class=HTMLResponse)
async def home(request: Request, source: TableSource = Depends(get_table_source)):
    """Home page: services grid followed by the featured assessments."""
    view = await _load_services(source)
    return render_template(request, "home.html", {
        "view": view,
        "catalog": AssessmentsCatalog(),
        "show_failure": False,
    })


@app.get("/services/{slug}", response_class=HTMLResponse)
async def service_detail(slug: str, request: Request, source: TableSource = Depends(get_table_source)):
    """Detail page for the service routed at `/services/{slug}`."""
    view = await _load_services(source)
    record = view.find(slug)
    return render_template(
        request,
        "service_detail.html",
        {"record": record, "icon": resolve_icon(record.icon if record else None)},
        status_code=200 if record else 404,
    )


@app.get("/api/services")
async def list_services(source: TableSource = Depends(get_table_source)):
    """Active services in display order; an empty list if the read failed."""
    view = await _load_services(source)
    return [record.as_dict() for record in view.records]


@app.get("/assessments", response_class=HTMLResponse)
def assessments_page(request: Request):
    return render_template(request, "assessments.html", {"catalog": AssessmentsCatalog()})


@app.post("/assessments/{assessment_id}/start")
def start_assessment(assessment_id: str, request: Request):
    """Receive the "Start Assessment" action and send the visitor back to the catalog."""
    def on_start(identifier: str) -> None:
        logger.info(
            "assessment_start %s",
            json.dumps(
                {"assessment_id": identifier, "request_id": getattr(request.state, "request_id", "")},
                ensure_ascii=True,
            ),
        )

    card = AssessmentsCatalog(on_start=on_start).find(assessment_id)
    if card is None:
        raise HTTPException(status_code=404, detail="assessment not found")
    card.activate()
    return RedirectResponse(url=f"/assessments#{assessment_id}", status_code=303)


@app.get("/cloud-sandbox", response_class=HTMLResponse)
def cloud_sandbox(request: Request):
    return render_template(request, "cloud_sandbox.html", {"catalog": CloudSandboxCatalog()})


@app.get("/cloud-sandbox/{slug}", response_class=HTMLResponse)
def cloud_sandbox_detail(slug: str, request: Request):
    record = CloudSandboxCatalog().get(slug)
    return render_template(
        request,
        "sandbox_detail.html",
        {"record": record},
        status_code=200 if record else 404,
    )


@app.post('/auth/register')
def register(payload: RegisterIn, db: Session = Depends(get_session)):
    """Register a new user (idempotent).

    Returns the existing user if the username is already taken so the
    operation can be repeated safely by automation and tests.
    """
    existing = repositories.UserRepository(db).get_by_username(payload.username)
    if existing:
        return {'id': existing.id, 'username': existing.username, 'is_admin': existing.is_admin}
    try:
        user = services.AuthService(db).register(payload.username, payload.password)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {'id': user.id, 'username': user.username, 'is_admin': user.is_admin}


@app.post('/auth/login', response_model=TokenOut)
def login(payload: RegisterIn, db: Session = Depends(get_session)):
    """Authenticate a user and return a short-lived JWT token."""
    token = services.AuthService(db).authenticate(payload.username, payload.password)
    if not token:
        raise HTTPException(status_code=401, detail='invalid credentials')
    return {'access_token': token}


@app.get('/admin/services', response_model=list[ServiceOut])
def admin_list_services(db: Session = Depends(get_session), user: models.User = Depends(require_admin)):
    """All services, inactive ones included, in display order."""
    return services.ServiceAdminService(db).list_all()


@app.post('/admin/services', response_model=ServiceOut, status_code=201)
def admin_create_service(payload: ServiceIn, db: Session = Depends(get_session), user: models.User = Depends(require_admin)):
    try:
        row = services.ServiceAdminService(db).create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("service_created %s", json.dumps({"id": row.id, "slug": row.slug, "by": user.username}))
    return row


@app.put('/admin/services/{service_id}', response_model=ServiceOut)
def admin_update_service(service_id: str, payload: ServiceUpdate, db: Session = Depends(get_session), user: models.User = Depends(require_admin)):
    try:
        row = services.ServiceAdminService(db).update(service_id, payload)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("service_updated %s", json.dumps({"id": row.id, "slug": row.slug, "by": user.username}))
    return row


@app.delete('/admin/services/{service_id}', status_code=204)
def admin_delete_service(service_id: str, db: Session = Depends(get_session), user: models.User = Depends(require_admin)):
    try:
        services.ServiceAdminService(db).delete(service_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    logger.info("service_deleted %s", json.dumps({"id": service_id, "by": user.username}))
    return Response(status_code=204)


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
