from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query, status

from folderstore.api.dependencies import get_store
from folderstore.api.models import CreateFolder, NamespaceResponse
from folderstore.config import get_settings
from folderstore.folders import create_folder, delete_folder
from folderstore.namespace import list_namespace
from folderstore.objectstorage.base import ObjectStore
from folderstore.paths import parse_path

app_folders = APIRouter(prefix="", tags=["folders"])


@app_folders.get("/namespace")
async def get_namespace(
    path: Annotated[str, Query(description="The folder to list, e.g. 'a/b' (empty for the root)")] = "",
    store: ObjectStore = Depends(get_store),
) -> NamespaceResponse:
    """
    List the subfolders and files directly inside a folder.
    """
    folder = parse_path(path)
    return NamespaceResponse.from_snapshot(folder, await list_namespace(store, folder))


@app_folders.post("/folders", status_code=status.HTTP_201_CREATED)
async def post_folder(
    body: Annotated[CreateFolder, Body(...)],
    store: ObjectStore = Depends(get_store),
) -> NamespaceResponse:
    """
    Create a folder. Creating a folder that already exists is not an error.

    Returns the new listing of the folder the folder was created in.
    """
    parent = parse_path(body.path)
    await create_folder(store, parent, body.name)
    return NamespaceResponse.from_snapshot(parent, await list_namespace(store, parent))


@app_folders.delete("/folders")
async def delete_folder_recursive(
    name: Annotated[str, Query(description="Name of the folder to delete")],
    path: Annotated[str, Query(description="The folder containing the folder to delete")] = "",
    store: ObjectStore = Depends(get_store),
) -> NamespaceResponse:
    """
    Delete a folder and everything in it.

    If some objects could not be deleted, the response lists them in failed_keys. Everything else is deleted anyway.
    """
    parent = parse_path(path)
    await delete_folder(store, parent, name, max_concurrency=get_settings().delete_concurrency)
    return NamespaceResponse.from_snapshot(parent, await list_namespace(store, parent))
