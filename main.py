# main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from auth import auth_router
from config import (
    CLEAR_NOTIFICATIONS_ON_STARTUP,
    CORS_ORIGIN,
    HOST,
    LOG_LEVEL,
    PORT,
    validate_settings,
)
from database import SessionLocal, init_db
from notifications import clear_notifications, notification_router
from profiles import profile_router
from router import router

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

logger = logging.getLogger(__name__)

# Specific messages for fields the frontend reports on directly
VALIDATION_MESSAGES = {
    "price": "Invalid price value",
    "entry_id": "Invalid entry ID",
    "notification_id": "Invalid notification ID",
}


def on_startup():
    validate_settings()
    init_db()
    if CLEAR_NOTIFICATIONS_ON_STARTUP:
        with SessionLocal() as db:
            deleted = clear_notifications(db)
        logger.info("Server restart: cleared %d notifications", deleted)


@asynccontextmanager
async def lifespan(app: FastAPI):
    on_startup()
    yield


app = FastAPI(title="Budget Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = "Invalid request"
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else None
        if field in VALIDATION_MESSAGES:
            message = VALIDATION_MESSAGES[field]
            break
        if field and message == "Invalid request":
            message = f"Invalid value for {field}"
    return JSONResponse(status_code=400, content={"message": message})


app.include_router(auth_router, prefix="/api", tags=["authentication"])
app.include_router(profile_router, prefix="/api/profile", tags=["profile"])
app.include_router(router, prefix="/api/entries", tags=["entries"])
app.include_router(
    notification_router, prefix="/api/notifications", tags=["notifications"]
)


@app.get("/")
def home():
    return {"message": "Budget App Backend"}


if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
