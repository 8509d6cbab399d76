"""folderstore API: browse, create and delete folders and files on the object store."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from folderstore.api.files import app_files
from folderstore.api.folders import app_folders
from folderstore.connections import folderstore_connections
from folderstore.errors import FolderStoreError, SubtreeDeletePartialFailure


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.info("Starting object store connection...")
    async with folderstore_connections():
        yield


app = FastAPI(
    title="folderstore",
    description=__doc__ if __doc__ else "",
    openapi_tags=[
        dict(name="folders", description="Endpoints to list folders, and to create and delete them"),
        dict(name="files", description="Endpoints to upload, delete and link to files"),
    ],
    lifespan=lifespan,
)
app.include_router(app_folders)
app.include_router(app_files)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


def error_status(exc: FolderStoreError) -> int:
    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, SubtreeDeletePartialFailure):
        return 500
    if getattr(exc, "not_found", False):
        return 404
    return 502


@app.exception_handler(FolderStoreError)
async def folderstore_exception_handler(request: Request, exc: FolderStoreError):
    content: dict = {"message": str(exc)}
    if isinstance(exc, SubtreeDeletePartialFailure):
        content["failed_keys"] = exc.failed_keys
    return JSONResponse(status_code=error_status(exc), content=content)


@app.exception_handler(ValueError)
async def value_error_exception_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=400,
        content={"message": str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc) -> JSONResponse:
    return JSONResponse(
        status_code=422, content={"message": "There was an issue with the data you sent.", "fields_invalid": exc.errors()}
    )
