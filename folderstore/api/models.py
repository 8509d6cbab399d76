from pydantic import BaseModel, Field

from folderstore.namespace import NamespaceSnapshot
from folderstore.paths import FolderPath, display_path, format_path


class NamespaceResponse(BaseModel):
    path: str = Field(description="The folder that was listed, e.g. 'a/b' ('' for the root)")
    display_path: str = Field(description="The folder as shown to users, e.g. '/a/b/'")
    folders: list[str] = Field(description="Names of the subfolders, sorted")
    files: list[str] = Field(description="Names of the files, sorted")

    @classmethod
    def from_snapshot(cls, path: FolderPath, snapshot: NamespaceSnapshot) -> "NamespaceResponse":
        return cls(
            path=format_path(path),
            display_path=display_path(path),
            folders=snapshot.sorted_folders(),
            files=snapshot.sorted_files(),
        )


class CreateFolder(BaseModel):
    path: str = Field("", description="The folder to create the new folder in ('' for the root)")
    name: str = Field(description="Name of the new folder")


class FileLink(BaseModel):
    url: str = Field(description="Download link for the file")
