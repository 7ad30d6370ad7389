"""Project-root file operations behind the file tools."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from file_agent.domain.exceptions import PathOutsideRootError

from .schemas import DirectoryItem, DirectoryListing, FileContents


@dataclass
class ProjectFiles:
    """本地文件实现，所有相对路径都拼接在 project_root 之下。

    confine=True 时，解析（含符号链接）后落在根目录外的路径会被拒绝。
    """

    project_root: Path
    confine: bool = True
    recursive_delete: bool = True

    def __post_init__(self) -> None:
        self.project_root = Path(self.project_root).expanduser().resolve()

    # ---- helpers -------------------------------------------------

    def _resolve(self, raw: str) -> Path:
        # 与 File(root, path) 一致：绝对路径也当作相对 root 处理
        candidate = self.project_root / str(raw or "").lstrip("/\\")
        if self.confine:
            try:
                candidate.resolve().relative_to(self.project_root)
            except ValueError as exc:
                raise PathOutsideRootError(
                    code="PATH_OUTSIDE_ROOT",
                    message=f"path outside project root: {raw}",
                ) from exc
        return candidate

    # ---- read ops ------------------------------------------------

    def list_files(self, path: str) -> DirectoryListing:
        directory = self._resolve(path)
        if not directory.is_dir():
            return DirectoryListing(items=[])
        return DirectoryListing(
            items=[DirectoryItem(name=entry.name, is_directory=entry.is_dir()) for entry in directory.iterdir()]
        )

    def read_file(self, path: str) -> FileContents:
        return FileContents(contents=self._resolve(path).read_text(encoding="utf-8"))

    # ---- writes --------------------------------------------------

    def write_file(self, path: str, contents: str) -> None:
        self.project_root.mkdir(parents=True, exist_ok=True)
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(contents, encoding="utf-8")

    def delete_file(self, path: str) -> None:
        target = self._resolve(path)
        if target.is_dir() and not target.is_symlink():
            if self.recursive_delete:
                shutil.rmtree(target)
            else:
                target.rmdir()
        elif target.exists() or target.is_symlink():
            target.unlink()
