"""
folderstore: folders and files on a flat object store
"""

import argparse
import asyncio
import inspect
import logging
import mimetypes
import os
import shlex
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import uvicorn
from uvicorn.config import LOGGING_CONFIG

from folderstore import files, folders
from folderstore.config import ENV_PREFIX, get_settings, validate_settings
from folderstore.connections import folderstore_connections, s3, s3_enabled
from folderstore.errors import FolderStoreError
from folderstore.namespace import NamespaceSnapshot, list_namespace
from folderstore.objectstorage.base import ObjectStore
from folderstore.objectstorage.memory import MemoryObjectStore
from folderstore.objectstorage.s3bucket import S3ObjectStore, get_bucket
from folderstore.paths import display_path, parse_path
from folderstore.session import BrowserSession


def run(args):
    logging.info(f"Starting server at port {args.port}, debug={not args.nodebug}")
    if validate_settings():
        logging.warning(validate_settings())
    if not s3_enabled():
        logging.warning("Warning: S3 is not configured - all requests will fail until it is")
    logging.info(
        "To change server config, create an .env file and/or set environment parameters,\n"
        f"{' ' * 26}see folderstore/config.py for more information.\n"
        f"{' ' * 26}You can also run `python -m folderstore create-env` to create an .env file\n"
    )

    log_config = "logging.yml" if Path("logging.yml").exists() else LOGGING_CONFIG
    uvicorn.run("folderstore.api:app", host="0.0.0.0", reload=not args.nodebug, port=int(args.port), log_config=log_config)


def create_env(args):
    if os.path.exists(".env"):
        print("*** File .env already exists, quitting ***")
        sys.exit(1)

    settings = get_settings()
    with open(".env", "w") as f:
        for fieldname, fieldinfo in type(settings).model_fields.items():
            if fieldname == "env_file":
                continue
            value = getattr(args, fieldname, None) or getattr(settings, fieldname)
            if doc := fieldinfo.description:
                f.write(f"# {doc}\n")
            if value is None:
                f.write(f"#{ENV_PREFIX}{fieldname}=\n\n")
            else:
                f.write(f"{ENV_PREFIX}{fieldname}={value}\n\n")
    os.chmod(".env", 0o600)
    print(f"*** Created {bold('.env')} file ***")


@asynccontextmanager
async def open_store(allow_memory: bool = False) -> AsyncIterator[ObjectStore]:
    if not s3_enabled():
        if not allow_memory:
            logging.error("S3 is not configured, set the s3_host, s3_access_key and s3_secret_key settings")
            sys.exit(1)
        logging.warning("S3 is not configured, using an in-memory store. Nothing will be saved!")
        yield MemoryObjectStore()
        return
    async with folderstore_connections():
        yield S3ObjectStore(s3(), await get_bucket())


async def list_folder(args):
    async with open_store() as store:
        path = parse_path(args.path)
        print_snapshot(display_path(path), await list_namespace(store, path))


async def make_folder(args):
    async with open_store() as store:
        folder = await folders.create_folder(store, parse_path(args.path), args.name)
        print(f"Created folder {display_path(folder)}")


async def remove_folder(args):
    async with open_store() as store:
        folder = await folders.delete_folder(
            store, parse_path(args.path), args.name, max_concurrency=get_settings().delete_concurrency
        )
        print(f"Deleted folder {display_path(folder)}")


async def put_file(args):
    file = Path(args.file)
    name = args.name or file.name
    content_type, _ = mimetypes.guess_type(name)
    async with open_store() as store:
        key = await files.upload(store, parse_path(args.path), name, file.read_bytes(), content_type=content_type)
        print(f"Uploaded {file} to {key}")


async def remove_file(args):
    async with open_store() as store:
        await files.delete_file(store, parse_path(args.path), args.name)
        print(f"Deleted {args.name}")


async def file_url(args):
    settings = get_settings()
    async with open_store() as store:
        path = parse_path(args.path)
        if args.share:
            print(await files.share_url(store, path, args.name, hours_valid=settings.share_hours_valid))
        else:
            print(await files.preview_url(store, path, args.name, hours_valid=settings.preview_hours_valid))


BROWSE_HELP = """Commands:
  ls                  list the current folder
  cd NAME             enter a subfolder (cd .. to go back)
  back                go to the parent folder
  mkdir NAME          create a folder
  rmdir NAME          delete a folder and everything in it
  put FILE [NAME]     upload a local file
  rm NAME             delete a file
  preview NAME        show a download link
  share NAME          show a share link
  help                show this help
  quit                stop browsing"""


async def browse(_args):
    async with open_store(allow_memory=True) as store:
        session = BrowserSession(store)
        await _browse_command(session, "ls", [])
        print("Type 'help' for a list of commands")
        while True:
            try:
                line = input(f"{display_path(session.current_path)} > ")
            except (KeyboardInterrupt, EOFError):
                print()
                return
            if not line.strip():
                continue
            try:
                command, *arguments = shlex.split(line)
            except ValueError as e:
                print(f"Invalid command: {e}")
                continue
            if command in ("quit", "exit"):
                return
            await _browse_command(session, command, arguments)


async def _browse_command(session: BrowserSession, command: str, arguments: list[str]) -> None:
    n = len(arguments)
    try:
        if command == "ls" and n == 0:
            print_snapshot(display_path(session.current_path), await session.refresh())
        elif (command == "back" and n == 0) or (command == "cd" and arguments == [".."]):
            print_snapshot(display_path(session.current_path), await session.back())
        elif command == "cd" and n == 1:
            print_snapshot(display_path(session.current_path), await session.enter(arguments[0]))
        elif command == "mkdir" and n == 1:
            await session.create_folder(arguments[0])
            print_snapshot(display_path(session.current_path), session.snapshot)
        elif command == "rmdir" and n == 1:
            await session.delete_folder(arguments[0])
            print_snapshot(display_path(session.current_path), session.snapshot)
        elif command == "put" and n in (1, 2):
            local = Path(arguments[0])
            name = arguments[1] if n == 2 else local.name
            content_type, _ = mimetypes.guess_type(name)
            await session.upload(name, local.read_bytes(), content_type=content_type)
            print_snapshot(display_path(session.current_path), session.snapshot)
        elif command == "rm" and n == 1:
            await session.delete_file(arguments[0])
            print_snapshot(display_path(session.current_path), session.snapshot)
        elif command == "preview" and n == 1:
            print(await session.preview_url(arguments[0]))
        elif command == "share" and n == 1:
            print(await session.share_url(arguments[0]))
        elif command == "help":
            print(BROWSE_HELP)
        else:
            print(f"Unknown command: {shlex.join([command, *arguments])}\n{BROWSE_HELP}")
    except (FolderStoreError, OSError) as e:
        print(f"Error: {e}")


def print_snapshot(path: str, snapshot: NamespaceSnapshot):
    print(f"Current path: {bold(path)}")
    if snapshot.is_empty:
        print("  No files or folders in this directory.")
    for name in snapshot.sorted_folders():
        print(f"  [dir]  {name}")
    for name in snapshot.sorted_files():
        print(f"  [file] {name}")


def bold(x):
    return "\033[1m" + str(x) + "\033[0m"


def main():
    parser = argparse.ArgumentParser(description=__doc__, prog="python -m folderstore")

    subparsers = parser.add_subparsers(dest="action", title="action", help="Action to perform:", required=True)
    p = subparsers.add_parser("run", help="Run the backend API in development mode")
    p.add_argument(
        "--no-debug",
        action="store_true",
        dest="nodebug",
        help="Disable debug mode (useful for testing downstream clients)",
    )
    p.add_argument("-p", "--port", help="Port", default=5000)
    p.set_defaults(func=run)

    p = subparsers.add_parser("create-env", help="Create the .env file")
    p.add_argument("--s3-host", dest="s3_host", help="S3 host, e.g. http://localhost:9000")
    p.add_argument("--s3-access-key", dest="s3_access_key", help="S3 access key")
    p.add_argument("--s3-secret-key", dest="s3_secret_key", help="S3 secret key")
    p.add_argument("--s3-bucket", dest="s3_bucket", help="S3 bucket")
    p.set_defaults(func=create_env)

    p = subparsers.add_parser("ls", help="List a folder")
    p.add_argument("path", nargs="?", default="", help="The folder to list, e.g. a/b (default: the root)")
    p.set_defaults(func=list_folder)

    p = subparsers.add_parser("mkdir", help="Create a folder")
    p.add_argument("path", help="The folder to create it in ('' for the root)")
    p.add_argument("name", help="Name of the new folder")
    p.set_defaults(func=make_folder)

    p = subparsers.add_parser("rmdir", help="Delete a folder and everything in it")
    p.add_argument("path", help="The folder containing the folder ('' for the root)")
    p.add_argument("name", help="Name of the folder to delete")
    p.set_defaults(func=remove_folder)

    p = subparsers.add_parser("put", help="Upload a file")
    p.add_argument("path", help="The folder to upload to ('' for the root)")
    p.add_argument("file", help="The local file to upload")
    p.add_argument("-n", "--name", help="Name to store the file under (default: the local file name)")
    p.set_defaults(func=put_file)

    p = subparsers.add_parser("rm", help="Delete a file")
    p.add_argument("path", help="The folder containing the file ('' for the root)")
    p.add_argument("name", help="Name of the file")
    p.set_defaults(func=remove_file)

    p = subparsers.add_parser("url", help="Print a download link for a file")
    p.add_argument("path", help="The folder containing the file ('' for the root)")
    p.add_argument("name", help="Name of the file")
    p.add_argument("--share", action="store_true", help="Create a (longer valid) share link")
    p.set_defaults(func=file_url)

    p = subparsers.add_parser("browse", help="Browse the folders interactively")
    p.set_defaults(func=browse)

    args = parser.parse_args()

    logging.basicConfig(format="[%(levelname)-7s:%(name)-15s] %(message)s", level=logging.INFO)
    for noisy in ("botocore", "aiobotocore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    try:
        if inspect.iscoroutinefunction(args.func):
            asyncio.run(args.func(args))
        else:
            args.func(args)
    except FolderStoreError as e:
        logging.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
