from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import database
from admin import router as admin_router
from auth import admin_gate, router as auth_router
from config import config
from exceptions import PortfolioAPIException
from logger import get_logger
from public import router as public_router
from resources import routers as resource_routers
from uploads import configure_cloudinary, router as upload_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A missing connection string aborts startup
    database.init_db()
    if not configure_cloudinary():
        logger.warning("Cloudinary credentials are not set; image uploads will fail")
    logger.info("Portfolio API started")
    yield
    database.close()


# ==================
# FastAPI app config
# ==================
app = FastAPI(title="Portfolio API", lifespan=lifespan)

app.middleware("http")(admin_gate)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==============
# Error handlers
# ==============
@app.exception_handler(PortfolioAPIException)
async def portfolio_exception_handler(request: Request, exc: PortfolioAPIException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "success": False},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid input",
            "success": False,
            "details": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
                for e in exc.errors()
            ],
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500, content={"error": "Internal server error", "success": False}
    )


# ======
# Routes
# ======
@app.get("/")
def root():
    return {"status": "ok", "service": "portfolio-api"}


@app.get("/test")
def test_database():
    ok = database.db is not None
    collections = []
    if ok:
        try:
            collections = database.db.list_collection_names()
        except Exception as e:
            logger.warning(f"Could not list collections: {e}")
    return {
        "backend": "running",
        "database": "connected" if ok else "not-available",
        "collections": collections[:10],
        "config": config.get_connection_info(),
    }


app.include_router(auth_router)
app.include_router(upload_router)
for resource_router in resource_routers:
    app.include_router(resource_router)
app.include_router(admin_router)
app.include_router(public_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
