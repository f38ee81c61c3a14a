"""Storage of uploaded employee documents."""

from __future__ import annotations

import re
import shutil
from pathlib import Path
from typing import Protocol
from uuid import UUID, uuid4

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class DocumentStore(Protocol):
    """Where employee documents live. Returns/accepts stored file names."""

    def save(self, employee_id: UUID, filename: str, content: bytes) -> str: ...

    def delete(self, employee_id: UUID, stored_name: str) -> None: ...

    def delete_all(self, employee_id: UUID) -> None: ...


def safe_filename(filename: str) -> str:
    """Strip directories and unsafe characters from a client file name."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "document"


class LocalDocumentStore:
    """Documents on the local disk under ``<root>/<employee_id>/``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def employee_dir(self, employee_id: UUID) -> Path:
        return self.root / str(employee_id)

    def save(self, employee_id: UUID, filename: str, content: bytes) -> str:
        """Write a document and return the unique stored name."""
        stored_name = f"{uuid4().hex[:12]}-{safe_filename(filename)}"
        directory = self.employee_dir(employee_id)
        directory.mkdir(parents=True, exist_ok=True)
        (directory / stored_name).write_bytes(content)
        return stored_name

    def delete(self, employee_id: UUID, stored_name: str) -> None:
        """Remove one document. Missing files are ignored."""
        path = self.employee_dir(employee_id) / safe_filename(stored_name)
        path.unlink(missing_ok=True)

    def delete_all(self, employee_id: UUID) -> None:
        shutil.rmtree(self.employee_dir(employee_id), ignore_errors=True)

    def path_for(self, employee_id: UUID, stored_name: str) -> Path:
        return self.employee_dir(employee_id) / safe_filename(stored_name)
