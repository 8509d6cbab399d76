from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from fastapi.responses import RedirectResponse

from folderstore import files
from folderstore.api.dependencies import get_store
from folderstore.api.models import FileLink, NamespaceResponse
from folderstore.config import get_settings
from folderstore.namespace import list_namespace
from folderstore.objectstorage.base import ObjectStore
from folderstore.paths import parse_path

app_files = APIRouter(prefix="/files", tags=["files"])


@app_files.post("", status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: Annotated[UploadFile, File(description="The file to upload")],
    path: Annotated[str, Form(description="The folder to upload the file to")] = "",
    name: Annotated[str | None, Form(description="Name to store the file under (default: the uploaded filename)")] = None,
    store: ObjectStore = Depends(get_store),
) -> NamespaceResponse:
    """
    Upload a file into a folder. An existing file with the same name is overwritten.

    Returns the new listing of the folder.
    """
    folder = parse_path(path)
    filename = name or file.filename
    if not filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file name given")
    data = await file.read()
    await files.upload(store, folder, filename, data, content_type=file.content_type)
    return NamespaceResponse.from_snapshot(folder, await list_namespace(store, folder))


@app_files.delete("")
async def delete_file(
    name: Annotated[str, Query(description="Name of the file to delete")],
    path: Annotated[str, Query(description="The folder containing the file")] = "",
    store: ObjectStore = Depends(get_store),
) -> NamespaceResponse:
    """
    Delete a file. Returns the new listing of the folder.
    """
    folder = parse_path(path)
    await files.delete_file(store, folder, name)
    return NamespaceResponse.from_snapshot(folder, await list_namespace(store, folder))


@app_files.get("/preview")
async def preview_file(
    name: Annotated[str, Query(description="Name of the file")],
    path: Annotated[str, Query(description="The folder containing the file")] = "",
    store: ObjectStore = Depends(get_store),
):
    """
    Open a file. This redirects to a (temporary) download link of the object store.
    """
    url = await files.preview_url(store, parse_path(path), name, hours_valid=get_settings().preview_hours_valid)
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@app_files.get("/share")
async def share_file(
    name: Annotated[str, Query(description="Name of the file")],
    path: Annotated[str, Query(description="The folder containing the file")] = "",
    store: ObjectStore = Depends(get_store),
) -> FileLink:
    """
    Get a download link that can be shared with others.
    """
    url = await files.share_url(store, parse_path(path), name, hours_valid=get_settings().share_hours_valid)
    return FileLink(url=url)
