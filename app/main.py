from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api.endpoints import (
    auth,
    bills,
    clients,
    logs,
    overview,
    payments,
    print_settings,
    projects,
    rates,
    users,
)
from app.api.endpoints import settings as settings_endpoints
from app.core.config import settings
from app.db.session import engine_internal_sync
from app.db.base import Base
from app.core.logging import init_sentry, setup_logging
from app.middleware.errors import register_exception_handlers
from app.middleware.logging import AccessLoggingMiddleware

app = FastAPI(
    title="Print Billing API",
    description="""
## Billing for a printing business

Clients, projects (area x rate), bills and the payments applied to them.

### Authentication

- `POST /api/auth/login` with `{"email": "...", "password": "..."}`
- On success the `user_id` and `user_role` cookies are set (httpOnly, 7 days)
- Every other endpoint reads those cookies

### Roles

- **ADMIN**: sees and manages everything, overrides bills, manages rates and users
- **USER / CLIENT**: only records assigned to them

### Errors

All errors are returned as `{"error": "<message>"}`.
    """,
    version="1.0.0"
)

# Initialize logging and error tracking
setup_logging()
init_sentry()

Base.metadata.create_all(bind=engine_internal_sync)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    AccessLoggingMiddleware,
    enabled=settings.ACCESS_LOG_ENABLED,
    slow_threshold_ms=settings.SLOW_REQUEST_MS,
)

register_exception_handlers(app)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(clients.router, prefix="/api/clients", tags=["clients"])
app.include_router(overview.router, prefix="/api/client-overview", tags=["clients"])
app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
app.include_router(bills.router, prefix="/api/bills", tags=["bills"])
app.include_router(payments.router, prefix="/api/payments", tags=["payments"])
app.include_router(rates.router, prefix="/api/rates", tags=["rates"])
app.include_router(print_settings.router, prefix="/api/print-settings", tags=["rates"])
app.include_router(settings_endpoints.router, prefix="/api/settings", tags=["settings"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(logs.router, prefix="/api/logs", tags=["logs"])

@app.get("/")
def root():
    return {"message": "Print Billing API. See /docs for the OpenAPI description."}


@app.get("/health")
def health():
    return {"status": "ok"}
