# -*- coding: utf-8 -*-
"""
LocForge UI String Module
Supports Traditional Chinese and English UI languages.
"""

from locforge_logger import get_logger

logger = get_logger("locales")

SUPPORTED_UI_LANGUAGES = {
    "zh_TW": "繁體中文",
    "en": "English"
}

DEFAULT_UI_LANGUAGE = "zh_TW"
_current_language = DEFAULT_UI_LANGUAGE


def set_language(lang_code: str):
    """Set the current UI language."""
    global _current_language
    if lang_code in SUPPORTED_UI_LANGUAGES:
        _current_language = lang_code
        logger.debug(f"UI language set to: {lang_code}")
    else:
        logger.warning(f"Unsupported language code '{lang_code}'. Using default.")


def get_language() -> str:
    """Get the current UI language code."""
    return _current_language


def tr(key: str, **kwargs) -> str:
    """
    Translate a key to the current language.

    Args:
        key: Translation key
        **kwargs: Format parameters for the translated string

    Returns:
        Translated string, or the key itself if not found
    """
    translations = TRANSLATIONS.get(_current_language, TRANSLATIONS.get("en", {}))
    text = translations.get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except KeyError as e:
            logger.warning(f"Missing format key {e} for translation '{key}'")

    return text


# =============================================================================
# TRANSLATIONS DICTIONARY
# =============================================================================

TRANSLATIONS = {
    "zh_TW": {
        # General
        "error": "錯誤",
        "success": "成功",

        # Compare
        "compare_found_missing": "找到 {count} 個缺少的項目",
        "compare_found_value": "找到 {count} 個差異的項目",
        "compare_found_search": "找到 {count} 個符合搜尋的項目",
        "compare_found_duplicates": "找到 {count} 列重複鍵（含同鍵的所有出現列）",
        "compare_no_missing": "沒有缺少的項目，兩個檔案完全一致！",
        "compare_no_value": "沒有差異，兩個檔案完全一致！",
        "compare_no_search": "沒有符合搜尋的項目",
        "compare_no_duplicates": "沒有重複鍵！",
        "compare_failed": "比對失敗：{error}",
        "compare_select_at_least_one": "請至少勾選一個項目",
        "compare_saved": "成功更新 {count} 個項目",
        "compare_exported": "成功匯出 {count} 個項目到 {path}",
        "compare_not_found_keys": "{count} 個鍵不存在於目標檔案",

        # Editor
        "editor_loaded": "已載入 {count} 個項目",
        "editor_saved": "儲存成功！",
        "editor_replaced": "已取代 {count} 個項目",
        "editor_find_empty": "請輸入要尋找的文字",
        "editor_no_file": "找不到語系檔案路徑",

        # Vehicle order
        "order_loaded": "已載入 {count} 個載具，其中 {ordered} 個已排序",
        "order_saved_active": "已儲存目前排序",
        "order_saved_as": "已另存排序：{name}",
        "order_applied": "已套用排序到語系 {locale}",
        "order_stripped": "已移除語系 {locale} 的排序前綴",
        "order_profile_deleted": "已刪除排序存檔：{name}",
        "order_profile_imported": "已匯入排序存檔：{name}",

        # Locales
        "locale_switched": "已切換語系為 {locale}",
        "locale_reset": "已恢復為遊戲預設語系",
        "locale_imported": "已匯入語系 {locale}",
        "locale_exported": "已匯出語系 {locale} 到 {path}",
        "locale_deleted": "已刪除語系 {locale}",
    },
    "en": {
        "error": "Error",
        "success": "Success",

        "compare_found_missing": "Found {count} missing entries",
        "compare_found_value": "Found {count} entries with different values",
        "compare_found_search": "Found {count} entries matching the search",
        "compare_found_duplicates": "Found {count} rows with duplicate keys (all occurrences)",
        "compare_no_missing": "No missing entries, both files match!",
        "compare_no_value": "No differences, both files match!",
        "compare_no_search": "No entries match the search",
        "compare_no_duplicates": "No duplicate keys!",
        "compare_failed": "Compare failed: {error}",
        "compare_select_at_least_one": "Select at least one entry",
        "compare_saved": "Updated {count} entries",
        "compare_exported": "Exported {count} entries to {path}",
        "compare_not_found_keys": "{count} keys do not exist in the target file",

        "editor_loaded": "Loaded {count} entries",
        "editor_saved": "Saved!",
        "editor_replaced": "Replaced in {count} entries",
        "editor_find_empty": "Enter the text to find",
        "editor_no_file": "Locale file path not found",

        "order_loaded": "Loaded {count} vehicles, {ordered} of them ordered",
        "order_saved_active": "Current order saved",
        "order_saved_as": "Order saved as: {name}",
        "order_applied": "Order applied to locale {locale}",
        "order_stripped": "Order prefixes removed from locale {locale}",
        "order_profile_deleted": "Order profile deleted: {name}",
        "order_profile_imported": "Order profile imported: {name}",

        "locale_switched": "Language switched to {locale}",
        "locale_reset": "Restored the game's default language",
        "locale_imported": "Locale {locale} imported",
        "locale_exported": "Locale {locale} exported to {path}",
        "locale_deleted": "Locale {locale} deleted",
    },
}
