import json
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

import locforge_config as config
from locforge_exceptions import (
    FileOperationError, InputError, ProfileFormatError, ProfileNotFoundError,
)
from locforge_logger import get_logger

logger = get_logger("core.order_profile_store")


def make_profile_document(base_keys: Sequence[str]) -> dict:
    return {
        "type": config.ORDER_PROFILE_TYPE,
        "version": config.ORDER_PROFILE_VERSION,
        "baseKeys": list(base_keys),
    }


def validate_profile_document(document, name: str = None, file_path: str = None) -> List[str]:
    """
    Check the vehicle_order shape and return its base keys.

    Raises:
        ProfileFormatError: anything other than a well-formed document
    """
    def _fail(reason: str):
        raise ProfileFormatError(f"Invalid order profile format: {reason}", name=name, file_path=file_path)

    if not isinstance(document, dict):
        _fail("not a JSON object")
    if document.get("type") != config.ORDER_PROFILE_TYPE:
        _fail(f"type is not '{config.ORDER_PROFILE_TYPE}'")
    version = document.get("version")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        _fail("version must be a positive integer")
    base_keys = document.get("baseKeys")
    if not isinstance(base_keys, list) or not all(isinstance(k, str) for k in base_keys):
        _fail("baseKeys must be a list of strings")
    return list(base_keys)


def sanitize_profile_name(name: str) -> str:
    """Trimmed name with path-unsafe characters replaced by '_'."""
    safe = (name or "").strip()
    for ch in config.PROFILE_NAME_FORBIDDEN:
        safe = safe.replace(ch, "_")
    return safe


class OrderProfileStore:
    """
    Named vehicle order profiles on disk.

    Layout under sort_dir:
        active.json        the auto-applied profile
        save/<name>.json   named profiles
    """

    def __init__(self, sort_dir):
        self.sort_dir = Path(sort_dir)
        self.save_dir = self.sort_dir / config.SORT_SAVE_DIR_NAME
        self.active_path = self.sort_dir / config.ACTIVE_ORDER_FILE_NAME

    def ensure_dirs(self):
        try:
            self.save_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create sort directories: {e}",
                                     file_path=str(self.save_dir), operation='mkdir') from e

    def profile_path(self, name: str) -> Path:
        safe = sanitize_profile_name(name)
        if not safe:
            raise InputError("Profile name is required", details={'name': name})
        return self.save_dir / f"{safe}.json"

    # =========================================================================
    # LOW LEVEL
    # =========================================================================

    def _write_document(self, path: Path, base_keys: Sequence[str]) -> Path:
        self.ensure_dirs()
        try:
            with path.open('w', encoding='utf-8') as f:
                json.dump(make_profile_document(base_keys), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise FileOperationError(f"Failed to write order profile: {e}",
                                     file_path=str(path), operation='write') from e
        return path

    def _read_document(self, path: Path, name: str = None) -> List[str]:
        try:
            with path.open('r', encoding='utf-8') as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise ProfileFormatError(f"Invalid order profile JSON: {e}",
                                     name=name, file_path=str(path)) from e
        except OSError as e:
            raise FileOperationError(f"Failed to read order profile: {e}",
                                     file_path=str(path), operation='read') from e
        return validate_profile_document(document, name=name, file_path=str(path))

    # =========================================================================
    # NAMED PROFILES
    # =========================================================================

    def save_profile(self, name: str, base_keys: Sequence[str]) -> Path:
        """Create or overwrite save/<name>.json."""
        path = self._write_document(self.profile_path(name), base_keys)
        logger.info(f"Saved order profile '{path.stem}' ({len(base_keys)} vehicles)")
        return path

    def load_profile(self, name: str) -> List[str]:
        path = self.profile_path(name)
        if not path.is_file():
            raise ProfileNotFoundError(f"Order profile not found: {name}", name=name)
        return self._read_document(path, name=name)

    def list_profiles(self) -> List[str]:
        if not self.save_dir.is_dir():
            return []
        names = [p.stem for p in self.save_dir.iterdir()
                 if p.is_file() and p.suffix.lower() == ".json"]
        return sorted(names)

    def delete_profile(self, name: str):
        path = self.profile_path(name)
        if not path.is_file():
            raise ProfileNotFoundError(f"Order profile not found: {name}", name=name)
        try:
            path.unlink()
        except OSError as e:
            raise FileOperationError(f"Failed to delete order profile: {e}",
                                     file_path=str(path), operation='delete') from e
        logger.info(f"Deleted order profile '{name}'")

    def export_profile(self, name: str, dest_file) -> Path:
        """Copy a named profile to an arbitrary path."""
        self.load_profile(name)
        dest = Path(dest_file)
        try:
            shutil.copyfile(self.profile_path(name), dest)
        except OSError as e:
            raise FileOperationError(f"Failed to export order profile: {e}",
                                     file_path=str(dest), operation='export') from e
        return dest

    def import_profile(self, source_file) -> str:
        """
        Validate an external profile and copy it into save/.

        The file name (without .json) becomes the profile name.
        """
        source = Path(source_file)
        if not source.is_file():
            raise ProfileNotFoundError(f"Profile file not found: {source}", name=source.name)

        base_keys = self._read_document(source, name=source.stem)
        name = source.stem if source.suffix.lower() == ".json" else source.name
        self.save_profile(name, base_keys)
        logger.info(f"Imported order profile '{name}' from {source}")
        return sanitize_profile_name(name)

    # =========================================================================
    # ACTIVE PROFILE
    # =========================================================================

    def save_active(self, base_keys: Sequence[str]) -> Path:
        path = self._write_document(self.active_path, base_keys)
        logger.info(f"Saved active order ({len(base_keys)} vehicles)")
        return path

    def load_active(self) -> Optional[List[str]]:
        """Active base keys, or None when no active profile exists."""
        if not self.active_path.is_file():
            return None
        return self._read_document(self.active_path, name=config.ACTIVE_ORDER_FILE_NAME)

    def has_active(self) -> bool:
        return self.active_path.is_file()

    def clear_active(self):
        if self.active_path.is_file():
            self.active_path.unlink()

    def activate_profile(self, name: str) -> List[str]:
        """Make a named profile the active one and return its keys."""
        base_keys = self.load_profile(name)
        self.save_active(base_keys)
        return base_keys
