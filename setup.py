#!/usr/bin/env python

from setuptools import setup

setup(
    name="folderstore",
    version="0.1.0",
    description="Folders and files on top of a flat S3-compatible object store",
    packages=["folderstore", "folderstore.api", "folderstore.objectstorage"],
    include_package_data=True,
    zip_safe=False,
    keywords=["API", "S3", "object storage", "folders"],
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Topic :: System :: Filesystems",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "python-multipart",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "typing-extensions",
        "uvicorn",
        "aiobotocore",
        "types-aiobotocore[s3]",
        "async-lru",
    ],
    extras_require={
        'dev': [
            'pytest',
            'anyio',
            'httpx',
            'mypy',
            'flake8',
        ]
    },
    entry_points={
        'console_scripts': [
            'folderstore = folderstore.__main__:main'
        ]
    },
)
