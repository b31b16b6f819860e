# app/api/v1/router.py
from fastapi import APIRouter

from app.config.settings import settings
from app.modules.catalog import catalog_router
from app.modules.checkout import checkout_router
from app.modules.reports import reports_router

# Main API v1 router
api_router = APIRouter(prefix="/api/v1")

# ==================== MODULES ====================

api_router.include_router(catalog_router)

api_router.include_router(checkout_router)

api_router.include_router(reports_router)

# ==================== ROOT ENDPOINTS ====================

@api_router.get("/")
async def api_root():
    """API v1 root"""
    return {
        "message": f"{settings.app_name} v1",
        "version": settings.version,
        "status": "active",
        "available_endpoints": {
            "categories": "/api/v1/categories",
            "products": "/api/v1/products",
            "checkout": "/api/v1/checkout",
            "report_today": "/api/v1/report/today",
            "report_range": "/api/v1/report?start_date=YYYY-MM-DD&end_date=YYYY-MM-DD"
        }
    }

@api_router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.version
    }
