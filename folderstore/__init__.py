"""Folder and file namespace on top of a flat S3-compatible object store."""
