import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from cafe.core.db import init_db, close_db
from cafe.core.config import PROJECT_NAME, VERSION
from cafe.core.exception_handlers import setup_exception_handlers
from cafe.services.user_service import ensure_default_roles, ensure_initial_admin
from cafe.api.routes.auth import router as auth_router
from cafe.api.routes.menu import router as menu_router
from cafe.api.routes.orders import router as orders_router
from cafe.api.routes.daily_sales import router as daily_sales_router, report_router as sales_report_router
from cafe.api.routes.inventory import router as inventory_router
from cafe.api.routes.raw_materials import router as raw_materials_router
from cafe.api.routes.users import router as users_router, roles_router as user_roles_router
from cafe.api.routes.settings import router as settings_router

log = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas
    await ensure_default_roles()
    await ensure_initial_admin()
    yield
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Include routers for modular API structure
app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
app.include_router(menu_router, prefix="/api/menu", tags=["Menu"])
app.include_router(orders_router, prefix="/api/orders", tags=["Order Management"])
app.include_router(daily_sales_router, prefix="/api/daily-sales", tags=["Sales"])
app.include_router(sales_report_router, prefix="/api/sales-report", tags=["Sales"])
app.include_router(inventory_router, prefix="/api/inventory", tags=["Inventory"])
app.include_router(raw_materials_router, prefix="/api/raw-materials", tags=["Inventory"])
app.include_router(users_router, prefix="/api/users", tags=["Users"])
app.include_router(user_roles_router, prefix="/api/user-roles", tags=["Users"])
app.include_router(settings_router, prefix="/api/settings", tags=["Settings"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
