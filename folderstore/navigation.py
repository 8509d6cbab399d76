from folderstore.paths import ROOT, FolderPath, check_depth, join, parent, validate_path


class NavigationState:
    """The folder a user is currently looking at. Starts at the root."""

    def __init__(self, current_path: FolderPath = ROOT):
        self.current_path = validate_path(current_path)

    @property
    def at_root(self) -> bool:
        return self.current_path == ROOT

    @property
    def can_go_back(self) -> bool:
        return not self.at_root

    def enter(self, name: str) -> FolderPath:
        """Move into subfolder name. Raises DepthExceeded (and stays put) if that would be too deep."""
        self.current_path = check_depth(join(self.current_path, name))
        return self.current_path

    def back(self) -> FolderPath:
        """Move to the parent folder. Does nothing at the root."""
        if self.can_go_back:
            self.current_path = parent(self.current_path)
        return self.current_path
