"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Safe file removal: files are moved to the system trash, never erased.
"""
from pathlib import Path

from send2trash import send2trash


class FileService:

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move file to trash: {e}") from e
