"""
The S3 client shared by the API and the CLI commands.

There is one client per process. It is opened by folderstore_connections (in the API lifespan,
around a CLI command or in a test fixture) and closed again when that ends. Stores borrow it through s3().
"""

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncGenerator

from aiobotocore.config import AioConfig
from aiobotocore.session import get_session
from types_aiobotocore_s3.client import S3Client

from folderstore.config import get_settings


class S3Connection:
    def __init__(self):
        self.client: S3Client | None = None
        self._exit_stack: AsyncExitStack | None = None

    async def open(self) -> None:
        if not s3_enabled():
            logging.warning("S3 is not configured, object storage is not available")
            return
        settings = get_settings()
        logging.debug(f"Connecting with S3 at {settings.s3_host}")
        client = get_session().create_client(
            service_name="s3",
            endpoint_url=settings.s3_host,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            config=AioConfig(signature_version="s3v4"),
        )
        self._exit_stack = AsyncExitStack()
        self.client = await self._exit_stack.enter_async_context(client)

    async def close(self) -> None:
        if self._exit_stack is None:
            return
        exit_stack, self._exit_stack, self.client = self._exit_stack, None, None
        await exit_stack.aclose()


S3_CONNECTION = S3Connection()


@asynccontextmanager
async def folderstore_connections() -> AsyncGenerator[None, None]:
    """Open the S3 client for the duration of the block. Use this once per server, command or test."""
    await S3_CONNECTION.open()
    try:
        yield
    finally:
        await S3_CONNECTION.close()


def s3() -> S3Client:
    if S3_CONNECTION.client is None:
        raise ConnectionError("S3 client not started")
    return S3_CONNECTION.client


def s3_enabled() -> bool:
    settings = get_settings()
    return all([settings.s3_host, settings.s3_access_key, settings.s3_secret_key])
