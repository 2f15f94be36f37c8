"""
FastAPI application for the Shipment Risk Alerting System
"""
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import settings
from core.exceptions import ShipmentNotFoundError, ShipmentValidationError
from services.alert_service import create_alert_service
from api.routers.alerts import router as alerts_router
from api.routers.health import router as health_router
from api.routers.shipments import router as shipments_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Shipment Risk Alerting System...")

    try:
        app.state.alert_service = create_alert_service()
        logger.info(f"Alert service ready with {len(app.state.alert_service.repository)} shipments")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("Shutting down application...")


# Create FastAPI app
app = FastAPI(
    title="Shipment Risk Alerting System",
    description="""
    Delay and risk alerts for in-flight logistics shipments.

    - **Risk assessment** of shipments from their milestone history
    - **Alert lists and summaries** for the monitoring dashboard
    - **Acknowledgements** by operations staff
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router, prefix="/health", tags=["Health"])
app.include_router(alerts_router, prefix="/alerts", tags=["Alerts"])
app.include_router(shipments_router, prefix="/shipments", tags=["Shipments"])


# Root endpoint
@app.get("/", tags=["Info"])
async def root():
    """API information"""
    return {
        "message": "Shipment Risk Alerting System API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "features": [
            "Shipment delay and risk assessment",
            "Alert lists and summaries",
            "Alert acknowledgement",
        ]
    }


@app.exception_handler(ShipmentValidationError)
async def validation_exception_handler(request: Request, exc: ShipmentValidationError):
    logger.info(f"Rejected request {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "detail": str(exc),
            "errors": exc.errors,
        }
    )


@app.exception_handler(ShipmentNotFoundError)
async def not_found_exception_handler(request: Request, exc: ShipmentNotFoundError):
    return JSONResponse(
        status_code=404,
        content={"error": "Not found", "detail": str(exc)}
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
