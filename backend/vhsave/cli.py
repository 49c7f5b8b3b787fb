"""
Command line tools

    player-tool <save-file>
    world-tool <meta-file> [<data-file>]

Both decode their input and print the model as indented JSON on stdout.
"""
import argparse
import codecs
import json
import sys
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel

from .config.logging_config import configure_logging
from .config.settings import get_settings
from .parsers.zpackage import ZPackageError
from .services.save_loader import load_player_profile, load_world

EXIT_OK = 0
EXIT_DECODE_ERROR = 1


def render_json(model: BaseModel) -> str:
    """Render a decoded model as indented JSON

    Strings that did not decode cleanly keep their raw bytes as escaped
    surrogates, so the output stays ASCII.
    """
    return json.dumps(model.model_dump(mode='json'), indent=2)


def _add_common_arguments(parser: argparse.ArgumentParser):
    parser.add_argument('--log-level', type=str, default=None,
                        help='stderr log level (default: LOG_LEVEL or WARNING)')
    parser.add_argument('--encoding', type=str, default=None,
                        help='text encoding of stored strings (default: VHSAVE_STRING_ENCODING or utf-8)')


def _check_log_level(parser: argparse.ArgumentParser, args: argparse.Namespace):
    if args.log_level is None:
        return
    try:
        logger.level(args.log_level.upper())
    except ValueError:
        parser.error(f"unknown log level: {args.log_level}")


def _check_encoding(parser: argparse.ArgumentParser, args: argparse.Namespace):
    if args.encoding is None:
        return
    try:
        codecs.lookup(args.encoding)
    except LookupError:
        parser.error(f"unknown encoding: {args.encoding}")


def _run(load, args: argparse.Namespace, what: str) -> int:
    try:
        settings = get_settings()
    except ValueError as e:
        # Logging is not configured yet
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    configure_logging(settings, level=args.log_level)
    try:
        model = load()
    except (ZPackageError, OSError) as e:
        logger.error(f"Failed to load {what}: {e}")
        print(f"error: failed to load {what}: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    print(render_json(model))
    return EXIT_OK


def player_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='player-tool', description='Decode a player profile (.fch) to JSON')
    parser.add_argument('save_file', type=str, help='Path to the player profile')
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _check_encoding(parser, args)
    _check_log_level(parser, args)

    return _run(lambda: load_player_profile(args.save_file, encoding=args.encoding), args, 'player save')


def world_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog='world-tool', description='Decode a world (.fwl and optional .db) to JSON')
    parser.add_argument('meta_file', type=str, help='Path to the world metadata file')
    parser.add_argument('data_file', type=str, nargs='?', default=None, help='Path to the world data file')
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _check_encoding(parser, args)
    _check_log_level(parser, args)

    return _run(lambda: load_world(args.meta_file, args.data_file, encoding=args.encoding), args, 'world')

