import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import app.config as cfg
from app.routers.catalog import router as catalog_router
from app.routers.resumes import router as resumes_router
from app.services.errors import ResumeServiceError

# Configure logging
logging.basicConfig(
	level=cfg.LOG_LEVEL,
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Resume Builder", version=cfg.APP_VERSION)

@app.on_event("startup")
async def on_startup():
	logger.info("App starting. version=%s", cfg.APP_VERSION)
	logger.info("db_path=%s exists=%s", cfg.DB_PATH, cfg.DB_PATH.exists())

@app.exception_handler(ResumeServiceError)
async def resume_service_error(request: Request, exc: ResumeServiceError):
	if exc.status_code >= 500:
		logger.error("request_failed path=%s error=%s", request.url.path, exc)
	else:
		logger.info("request_rejected path=%s status=%d detail=%s", request.url.path, exc.status_code, exc)
	return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

@app.get("/health")
async def health():
	return {"status": "ok", "version": cfg.APP_VERSION}

# API routes
app.include_router(resumes_router)
app.include_router(catalog_router)
