import sys
import os
import argparse

from locforge_logger import get_logger
logger = get_logger("main")

if getattr(sys, 'frozen', False):
    application_path = os.path.dirname(sys.executable)
    sys.path.insert(0, application_path)
    logger.debug(f"Running from bundle. Added to sys.path: {application_path}")
elif __file__:
    application_path = os.path.dirname(__file__)
    if application_path not in sys.path:
        sys.path.insert(0, application_path)
    logger.debug(f"Running from script. Added to sys.path: {application_path}")

import locforge_config as config
import locales
from core.compare_engine import DuplicateRow, compare_files
from core.order_profile_store import OrderProfileStore
from core.vehicle_order import apply_order, strip_order
from locforge_enums import CompareMode
from locforge_exceptions import LocForgeError, NotFoundError
from models.locale_file import LocaleFile, LocaleFileFormat, write_locale_file
from models.settings_model import SettingsModel
from utils import game_layout


def _print_rows(rows):
    for row in rows:
        if isinstance(row, DuplicateRow):
            print(f"{row.line_number}\t{row.key}={row.value}")
        elif row.current_value is not None and row.current_value != row.value:
            print(f"{row.key}\t{row.current_value}\t->\t{row.value}")
        else:
            print(f"{row.key}={row.value}")


def cmd_compare(args) -> int:
    result = compare_files(args.current, args.reference, args.mode, args.query)
    _print_rows(result.rows)
    logger.info(f"{result.count} rows ({result.mode.value})")
    if args.output and result.rows:
        write_locale_file(args.output, [row.to_entry() for row in result.rows], _file_format())
    return 1 if (args.fail_on_diff and result.rows) else 0


def cmd_duplicates(args) -> int:
    result = compare_files(args.file, None, CompareMode.DUPLICATE_KEYS)
    _print_rows(result.rows)
    logger.info(f"{result.duplicate_key_count} duplicated keys")
    return 1 if (args.fail_on_diff and result.rows) else 0


def _resolve_order(args) -> list:
    store = OrderProfileStore(game_layout.get_sort_path(args.game_root))
    if args.profile:
        return store.load_profile(args.profile)
    base_keys = store.load_active()
    if base_keys is None:
        raise NotFoundError("No active vehicle order; pass --profile")
    return base_keys


def _locale_file(args) -> LocaleFile:
    return LocaleFile.load(game_layout.get_locale_ini_path(args.game_root, args.locale))


def _file_format() -> LocaleFileFormat:
    settings = SettingsModel.instance()
    return LocaleFileFormat(eol=settings.line_ending, bom=settings.write_bom)


def cmd_apply_order(args) -> int:
    base_keys = _resolve_order(args)
    locale_file = _locale_file(args)
    locale_file.replace_entries(apply_order(locale_file.entries, base_keys))
    locale_file.save()
    print(locales.tr("order_applied", locale=args.locale))
    return 0


def cmd_strip_order(args) -> int:
    base_keys = _resolve_order(args)
    locale_file = _locale_file(args)
    locale_file.replace_entries(strip_order(locale_file.entries, base_keys))
    locale_file.save(args.output)
    print(locales.tr("order_stripped", locale=args.locale))
    return 0


def cmd_profiles(args) -> int:
    store = OrderProfileStore(game_layout.get_sort_path(args.game_root))
    if args.delete:
        store.delete_profile(args.delete)
        print(locales.tr("order_profile_deleted", name=args.delete))
    elif args.import_file:
        name = store.import_profile(args.import_file)
        print(locales.tr("order_profile_imported", name=name))
    elif args.activate:
        store.activate_profile(args.activate)
    else:
        for name in store.list_profiles():
            print(name)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locforge",
        description="Compare, update and order key=value localization files (LocForge).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
    parser.add_argument("--version", action="version", version=f"%(prog)s {config.VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compare", help="Compare a file against a reference file.")
    p.add_argument("current", help="File being maintained.")
    p.add_argument("reference", help="Reference file.")
    p.add_argument("-m", "--mode", default=CompareMode.MISSING.value,
                   choices=[CompareMode.MISSING.value, CompareMode.VALUE.value,
                            CompareMode.SEARCH_VALUE.value])
    p.add_argument("-q", "--query", default=None, help="Search text for searchValue mode.")
    p.add_argument("-o", "--output", default=None, help="Write result rows to this file.")
    p.add_argument("--fail-on-diff", action="store_true", help="Exit with 1 when rows are found.")
    p.set_defaults(func=cmd_compare)

    p = sub.add_parser("duplicates", help="List every occurrence of duplicated keys.")
    p.add_argument("file")
    p.add_argument("--fail-on-diff", action="store_true", help="Exit with 1 when duplicates exist.")
    p.set_defaults(func=cmd_duplicates)

    for name, func, helptext in (
            ("apply-order", cmd_apply_order, "Write vehicle order prefixes into a locale."),
            ("strip-order", cmd_strip_order, "Remove vehicle order prefixes from a locale.")):
        p = sub.add_parser(name, help=helptext)
        p.add_argument("game_root")
        p.add_argument("locale")
        p.add_argument("-p", "--profile", default=None, help="Named profile (default: active order).")
        if name == "strip-order":
            p.add_argument("-o", "--output", default=None, help="Write to this file instead of in place.")
        p.set_defaults(func=func)

    p = sub.add_parser("profiles", help="List or manage saved vehicle order profiles.")
    p.add_argument("game_root")
    group = p.add_mutually_exclusive_group()
    group.add_argument("--delete", metavar="NAME")
    group.add_argument("--import", dest="import_file", metavar="FILE")
    group.add_argument("--activate", metavar="NAME")
    p.set_defaults(func=cmd_profiles)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = SettingsModel.instance()
    locales.set_language(settings.ui_language)

    try:
        return args.func(args)
    except LocForgeError as e:
        logger.error(str(e))
        print(f"{locales.tr('error')}: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    logger.info(f"Starting {config.APP_NAME}...")
    sys.exit(main())
