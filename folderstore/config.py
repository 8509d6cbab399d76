"""
folderstore Configuration

We read configuration from 2 sources, in order of precedence (higher is more priority)
- Environment variables
- A .env file, either in the current working directory or in a location specified
  by the FOLDERSTORE_ENV_FILE environment variable
"""

import functools
from pathlib import Path
from typing import Annotated

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "folderstore_"


class Settings(BaseSettings):
    env_file: Annotated[
        Path,
        Field(
            description="Location of a .env file (if used) relative to working directory",
        ),
    ] = Path(".env")

    s3_host: Annotated[str | None, Field(description="S3-compatible object storage host")] = None
    s3_access_key: Annotated[str | None, Field(description="S3 access key")] = None
    s3_secret_key: Annotated[str | None, Field(description="S3 secret key")] = None
    s3_bucket: Annotated[
        str,
        Field(
            description="Bucket that holds the folder tree. It is created if it does not exist",
        ),
    ] = "folderstore"

    use_test_bucket: Annotated[
        bool,
        Field(
            description="Use the test-<s3_bucket> bucket instead of the real one (used by the unit tests)",
        ),
    ] = False

    preview_hours_valid: Annotated[
        int,
        Field(description="Number of hours a preview (download) link stays valid", gt=0),
    ] = 24

    share_hours_valid: Annotated[
        int,
        Field(
            description="Number of hours a share link stays valid. S3 does not allow more than 168 (7 days)",
            gt=0,
            le=168,
        ),
    ] = 168

    delete_concurrency: Annotated[
        int | None,
        Field(
            description="Maximum number of concurrent store calls when deleting a folder. Leave empty for no limit",
            gt=0,
        ),
    ] = None

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX)


@functools.lru_cache()
def get_settings() -> Settings:
    # Read the settings once to find the env_file, then load it without overriding
    # variables that are already set in the environment
    temp = Settings()
    load_dotenv(temp.env_file, override=False)
    return Settings()


def validate_settings():
    settings = get_settings()
    s3_values = [settings.s3_host, settings.s3_access_key, settings.s3_secret_key]
    if any(s3_values) and not all(s3_values):
        return (
            "S3 is only partially configured: s3_host, s3_access_key and s3_secret_key should all be set."
            " Falling back to no object storage."
        )


if __name__ == "__main__":
    # Echo the settings
    for k, v in get_settings().model_dump().items():
        print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")
