import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from optimaflow.core.config import settings
from optimaflow.core.errors import OptimaFlowError
from optimaflow.core.logs import configure_logging
from optimaflow.db.base import engine, Base
from optimaflow.api.v1.endpoints import opportunities, activities, dealerships, external_dealerships, company, leads
from optimaflow.models import user, opportunity, activity, dealership  # noqa: F401

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Crear las tablas si hay base de datos configurada
if engine is not None:
    Base.metadata.create_all(bind=engine)

app = FastAPI(title="OptimaFlow API")

# Configuración de CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(OptimaFlowError)
async def manejar_error_dominio(request: Request, exc: OptimaFlowError):
    if exc.status_code >= 500:
        logger.error("%s en %s: %s", type(exc).__name__, request.url.path, exc.mensaje)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.mensaje})

# Incluir routers
app.include_router(opportunities.router, prefix="/api/v1")
app.include_router(activities.router, prefix="/api/v1")
app.include_router(dealerships.router, prefix="/api/v1")
app.include_router(external_dealerships.router, prefix="/api/v1")
app.include_router(company.router, prefix="/api/v1")
app.include_router(leads.router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "API de OptimaFlow funcionando correctamente"}

@app.get("/health")
def health_check():
    return {"status": "ok", "database": engine is not None}
