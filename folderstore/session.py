"""
A browsing session for one user.

The session keeps track of the current folder and of the snapshot of its contents. It is the
caller of the namespace operations, so it is also the one that refreshes the snapshot: after
every change of folder, and after every mutation, whether that succeeded or not.
"""

import contextlib
import logging
from typing import AsyncIterator

from folderstore import files, folders
from folderstore.config import Settings, get_settings
from folderstore.errors import ListingFailed
from folderstore.namespace import NamespaceSnapshot, list_namespace
from folderstore.navigation import NavigationState
from folderstore.objectstorage.base import ObjectStore
from folderstore.paths import FolderPath


class BrowserSession:
    def __init__(
        self,
        store: ObjectStore,
        settings: Settings | None = None,
        navigation: NavigationState | None = None,
    ):
        self.store = store
        self.settings = settings or get_settings()
        self.navigation = navigation or NavigationState()
        self.snapshot = NamespaceSnapshot.empty()

    @property
    def current_path(self) -> FolderPath:
        return self.navigation.current_path

    async def refresh(self) -> NamespaceSnapshot:
        """
        List the current folder again. If that fails, the snapshot is emptied and ListingFailed is raised:
        the contents are unknown, the folder is not necessarily empty.
        """
        try:
            self.snapshot = await list_namespace(self.store, self.current_path)
        except ListingFailed as e:
            logging.error(str(e))
            self.snapshot = NamespaceSnapshot.empty()
            raise
        return self.snapshot

    async def enter(self, name: str) -> NamespaceSnapshot:
        self.navigation.enter(name)
        return await self.refresh()

    async def back(self) -> NamespaceSnapshot:
        if not self.navigation.can_go_back:
            return self.snapshot
        self.navigation.back()
        return await self.refresh()

    async def create_folder(self, name: str) -> FolderPath:
        async with self._mutation("creating folder"):
            folder = await folders.create_folder(self.store, self.current_path, name)
        logging.info(f'Folder "{folder[-1]}" created successfully.')
        return folder

    async def delete_folder(self, name: str) -> FolderPath:
        async with self._mutation("deleting folder"):
            folder = await folders.delete_folder(
                self.store, self.current_path, name, max_concurrency=self.settings.delete_concurrency
            )
        logging.info(f'Folder "{name}" and its contents deleted successfully.')
        return folder

    async def upload(self, name: str, data: bytes, content_type: str | None = None) -> str:
        async with self._mutation("uploading file"):
            key = await files.upload(self.store, self.current_path, name, data, content_type=content_type)
        logging.info(f'File "{name}" uploaded successfully.')
        return key

    async def delete_file(self, name: str) -> None:
        async with self._mutation("deleting file"):
            await files.delete_file(self.store, self.current_path, name)
        logging.info(f'File "{name}" deleted successfully.')

    async def preview_url(self, name: str) -> str:
        return await files.preview_url(
            self.store, self.current_path, name, hours_valid=self.settings.preview_hours_valid
        )

    async def share_url(self, name: str) -> str:
        return await files.share_url(self.store, self.current_path, name, hours_valid=self.settings.share_hours_valid)

    @contextlib.asynccontextmanager
    async def _mutation(self, action: str) -> AsyncIterator[None]:
        try:
            yield
        except Exception as e:
            logging.error(f"Error {action}: {e}")
            # The mutation error is the one to report; a failed refresh is already logged
            with contextlib.suppress(ListingFailed):
                await self.refresh()
            raise
        await self.refresh()
