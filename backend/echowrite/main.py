import logging

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import text

from echowrite.core.config import settings
from echowrite.core.errors import EchoWriteError, ErrorKind, InvalidInput
from echowrite.core.logging import configure_logging
from echowrite.db.session import get_db

from echowrite.api.echowrite import router as echowrite_router
from echowrite.api.user_account import router as user_account_router

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="EchoWrite API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EchoWriteError)
async def echowrite_error_handler(request: Request, exc: EchoWriteError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    err = InvalidInput("Invalid request")
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": "An error occurred", "code": ErrorKind.upstream_error.value},
    )


app.include_router(echowrite_router)
app.include_router(user_account_router)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/db-check")
async def db_check(db: AsyncSession = Depends(get_db)):
    r = await db.execute(text("SELECT 1"))
    return {"db": r.scalar_one()}
