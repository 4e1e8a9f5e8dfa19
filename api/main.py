# api/main.py
import logging
from datetime import datetime, UTC

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api.routes import books, users, shelves, reviews, favourites, health
from core.config import settings, configure_logging
from core.errors import LibraryError
from core.sa.database import get_database

logger = logging.getLogger(__name__)

app = FastAPI(title="BookBuddy")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    configure_logging()
    get_database().init_db()

@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status": exc.status_code,
            "message": exc.message,
            "timestamp": datetime.now(UTC).isoformat()
        }
    )

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.error("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "status": status.HTTP_400_BAD_REQUEST,
            "message": message,
            "timestamp": datetime.now(UTC).isoformat()
        }
    )

@app.get("/")
async def root():
    return {"message": "BookBuddy API"}

app.include_router(books.router)
app.include_router(users.router)
app.include_router(shelves.router)
app.include_router(reviews.router)
app.include_router(favourites.router)
app.include_router(health.router)
