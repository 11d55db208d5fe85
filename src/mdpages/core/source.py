"""Source store interface and a filesystem-backed implementation using virtual paths"""

from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Protocol, runtime_checkable

from mdpages.errors import DocumentNotFoundError


MD_EXTENSIONS = {'.md', '.mdx'}


@runtime_checkable
class SourceStore(Protocol):
    """Read-only access to markdown sources addressed by '/'-separated virtual paths."""

    def exists(self, path: str) -> bool: ...

    def read_all_text(self, path: str) -> str: ...

    def last_modified(self, path: str) -> datetime: ...

    def file_name(self, path: str) -> str: ...

    def discover(self, section: str = '') -> list[str]: ...


class FileSystemSource:
    """SourceStore over a directory; virtual paths are POSIX paths relative to root."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root.joinpath(*PurePosixPath(path.lstrip('/')).parts)

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_all_text(self, path: str) -> str:
        """Return the file's text. Raises DocumentNotFoundError for a missing file."""
        file = self._resolve(path)
        if not file.is_file():
            raise DocumentNotFoundError(path)
        return file.read_text(encoding='utf-8')

    def last_modified(self, path: str) -> datetime:
        file = self._resolve(path)
        if not file.is_file():
            raise DocumentNotFoundError(path)
        return datetime.fromtimestamp(file.stat().st_mtime, tz=timezone.utc)

    def file_name(self, path: str) -> str:
        return PurePosixPath(path).name

    def discover(self, section: str = '') -> list[str]:
        """Return sorted virtual paths of .md/.mdx files under section (recursive)."""
        base = self._resolve(section) if section else self.root
        if base.is_file():
            return [section.lstrip('/')] if base.suffix in MD_EXTENSIONS else []
        if not base.is_dir():
            return []
        return sorted(
            p.relative_to(self.root).as_posix()
            for p in base.rglob('*')
            if p.is_file() and p.suffix in MD_EXTENSIONS
        )
