"""
LocForge Game Layout Utilities
Locates locale files, the Sort folder and system.cfg under a game root.

The game root itself is chosen (and validated) by the caller; these helpers
only know the folder layout below it:

    <root>/<LIVE|PTU|EPTU>/data/Localization/<locale>/global.ini
    <root>/<LIVE|PTU|EPTU>/data/Sort/{active.json, save/}
    <root>/LIVE/data/system.cfg
"""
import shutil
from pathlib import Path
from typing import List, Optional

import locforge_config as config
from locforge_exceptions import (
    FileOperationError, InvalidLocaleError, LocaleFileNotFoundError, LocaleInUseError,
)
from locforge_logger import get_logger

logger = get_logger("utils.game_layout")


def _version_dirs(game_root) -> List[Path]:
    root = Path(game_root)
    return [root / vf for vf in config.VERSION_FOLDERS]


def _data_dir(game_root) -> Path:
    """data/ of the first existing version folder, LIVE when none exists."""
    for version_dir in _version_dirs(game_root):
        if version_dir.is_dir():
            return version_dir / config.DATA_DIR_NAME
    return Path(game_root) / config.DEFAULT_VERSION_FOLDER / config.DATA_DIR_NAME


def _require_locale(locale: str) -> str:
    locale = (locale or "").strip()
    if not locale:
        raise InvalidLocaleError("Locale name is required", locale=locale)
    return locale


# =============================================================================
# LOCALIZATION FOLDERS
# =============================================================================

def get_localization_path(game_root) -> Path:
    return _data_dir(game_root) / config.LOCALIZATION_DIR_NAME


def has_localization_base(game_root) -> bool:
    return get_localization_path(game_root).is_dir()


def list_installed_locales(game_root) -> List[str]:
    """Locale folder names across all version folders, without duplicates."""
    seen = []
    for version_dir in _version_dirs(game_root):
        loc_dir = version_dir / config.DATA_DIR_NAME / config.LOCALIZATION_DIR_NAME
        if not loc_dir.is_dir():
            continue
        for child in sorted(loc_dir.iterdir()):
            if child.is_dir() and not child.name.startswith('.') and child.name not in seen:
                seen.append(child.name)
    return seen


def find_locale_ini_path(game_root, locale: str) -> Optional[Path]:
    locale = _require_locale(locale)
    for version_dir in _version_dirs(game_root):
        candidate = (version_dir / config.DATA_DIR_NAME / config.LOCALIZATION_DIR_NAME
                     / locale / config.LOCALE_FILE_NAME)
        if candidate.is_file():
            return candidate
    return None


def get_locale_ini_path(game_root, locale: str) -> Path:
    """global.ini of a locale; raises LocaleFileNotFoundError when absent."""
    path = find_locale_ini_path(game_root, locale)
    if path is None:
        raise LocaleFileNotFoundError(f"{config.LOCALE_FILE_NAME} not found for locale: {locale}",
                                      file_path=str(get_localization_path(game_root) / locale))
    return path


def import_locale_file(game_root, locale: str, source_file) -> Path:
    """Copy a global.ini into <Localization>/<locale>/, creating the folder."""
    locale = _require_locale(locale)
    source = Path(source_file)
    if not source.is_file():
        raise LocaleFileNotFoundError(f"Source file does not exist: {source}", file_path=str(source))

    target = get_localization_path(game_root) / locale / config.LOCALE_FILE_NAME
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as e:
        raise FileOperationError(f"Failed to import locale file: {e}",
                                 file_path=str(target), operation='import') from e
    logger.info(f"Imported {source.name} as locale '{locale}'")
    return target


def export_locale_file(game_root, locale: str, dest_file) -> Path:
    source = get_locale_ini_path(game_root, locale)
    dest = Path(dest_file)
    try:
        shutil.copyfile(source, dest)
    except OSError as e:
        raise FileOperationError(f"Failed to export locale file: {e}",
                                 file_path=str(dest), operation='export') from e
    return dest


def delete_locale(game_root, locale: str) -> int:
    """
    Remove a locale folder from every version folder.

    Returns the number of folders removed.

    Raises:
        LocaleInUseError: the game is configured to use this locale
    """
    locale = _require_locale(locale)
    if get_user_language(game_root) == locale:
        raise LocaleInUseError("Cannot delete the locale currently in use", locale=locale)

    removed = 0
    for version_dir in _version_dirs(game_root):
        target = version_dir / config.DATA_DIR_NAME / config.LOCALIZATION_DIR_NAME / locale
        if not target.is_dir():
            continue
        try:
            shutil.rmtree(target)
            removed += 1
        except OSError as e:
            raise FileOperationError(f"Failed to delete locale folder: {e}",
                                     file_path=str(target), operation='delete') from e
    logger.info(f"Deleted locale '{locale}' from {removed} version folders")
    return removed


# =============================================================================
# SORT FOLDER
# =============================================================================

def get_sort_path(game_root) -> Path:
    return _data_dir(game_root) / config.SORT_DIR_NAME


# =============================================================================
# SYSTEM.CFG LANGUAGE
# =============================================================================

def get_system_cfg_path(game_root) -> Path:
    return (Path(game_root) / config.DEFAULT_VERSION_FOLDER / config.DATA_DIR_NAME
            / config.SYSTEM_CFG_NAME)


def _cfg_key(line: str) -> str:
    return line.split('=', 1)[0].strip() if '=' in line else line.strip().split(' ', 1)[0]


def get_user_language(game_root) -> str:
    """g_language from system.cfg, "" when unset or unreadable."""
    cfg_path = get_system_cfg_path(game_root)
    try:
        lines = cfg_path.read_text(encoding='utf-8').splitlines()
    except (OSError, UnicodeDecodeError):
        return ""

    for line in lines:
        if _cfg_key(line) == config.SYSTEM_CFG_LANGUAGE_KEY and '=' in line:
            return line.split('=', 1)[1].replace(' ', '').strip()
    return ""


def set_user_language(game_root, locale: str) -> Path:
    """Write sys_languages and g_language into system.cfg (created if missing)."""
    locale = _require_locale(locale)
    data_dir = Path(game_root) / config.DEFAULT_VERSION_FOLDER / config.DATA_DIR_NAME
    if not data_dir.is_dir():
        raise InvalidLocaleError(f"{config.DEFAULT_VERSION_FOLDER} data directory not found",
                                 locale=locale)

    cfg_path = get_system_cfg_path(game_root)
    lang_line = f"{config.SYSTEM_CFG_LANGUAGE_KEY}={locale}"
    sys_line = f"{config.SYSTEM_CFG_SYS_LANGUAGES_KEY}={locale}"

    try:
        if not cfg_path.is_file():
            content = "\n".join([sys_line, lang_line, config.SYSTEM_CFG_AUDIO_DEFAULT]) + "\n"
        else:
            lines = cfg_path.read_text(encoding='utf-8').split('\n')
            found_lang = found_sys = False
            for i, line in enumerate(lines):
                key = _cfg_key(line)
                if key == config.SYSTEM_CFG_LANGUAGE_KEY:
                    lines[i] = lang_line
                    found_lang = True
                elif key == config.SYSTEM_CFG_SYS_LANGUAGES_KEY:
                    lines[i] = sys_line
                    found_sys = True
            if not found_lang:
                lines.append(lang_line)
            if not found_sys:
                lines.append(sys_line)
            content = "\n".join(lines)
        cfg_path.write_text(content, encoding='utf-8')
    except OSError as e:
        raise FileOperationError(f"Failed to update {config.SYSTEM_CFG_NAME}: {e}",
                                 file_path=str(cfg_path), operation='write') from e

    logger.info(f"Game language set to '{locale}'")
    return cfg_path


def reset_to_default_language(game_root) -> bool:
    """Delete system.cfg. Returns False when there was nothing to delete."""
    cfg_path = get_system_cfg_path(game_root)
    if not cfg_path.is_file():
        return False
    try:
        cfg_path.unlink()
    except OSError as e:
        raise FileOperationError(f"Failed to remove {config.SYSTEM_CFG_NAME}: {e}",
                                 file_path=str(cfg_path), operation='delete') from e
    logger.info("Game language reset to default")
    return True
