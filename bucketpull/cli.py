"""
bucketpull - Main CLI interface

Fetches single objects, properties documents and whole key prefixes
from an S3 bucket to local disk.
"""
import sys
import argparse
from colorama import init

from .errors import ConfigError
from .utils.config_loader import ConfigLoader, handle_config_update, merge_cli_overrides
from .utils.logger import get_logger, setup_logging

# Initialize colorama
init(autoreset=True)

log = get_logger(__name__)

# ── Help-text epilogs for subcommands ──────────────────────────────────────

GET_EXAMPLES = """\
Examples:
  bucketpull get app.properties
  bucketpull get conf/app.properties --output /tmp/app.properties
  bucketpull get conf/app.properties --no-keep --print
"""

PROPS_EXAMPLES = """\
Examples:
  bucketpull props conf/app.properties
  bucketpull props conf/app.properties --format json
"""

SYNC_EXAMPLES = """\
Examples:
  bucketpull sync ./mirror
  bucketpull sync ./mirror --prefix models/ --clear
  bucketpull sync ./mirror --prefix models/ --continue-on-error

Keys are mirrored verbatim under DEST (models/x.bin -> DEST/models/x.bin)
unless --strip-prefix is given.
"""


class BucketPull:
    """Main CLI application class."""

    def __init__(self, config=None):
        """Initialize CLI application.

        Args:
            config: Configuration dictionary (loaded from config.json if None)
        """
        self.config = config if config is not None else ConfigLoader.load_config_json()


def create_argument_parser():
    """Create and configure the subparser-based argument parser."""
    parser = argparse.ArgumentParser(
        prog='bucketpull',
        description='bucketpull — fetch files and directories from S3',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global flags (apply to all subcommands)
    parser.add_argument('--region', help='AWS region (overrides config)')
    parser.add_argument('--bucket', help='S3 bucket name (overrides config)')
    parser.add_argument('--profile', help='AWS CLI profile (overrides config)')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('--quiet', action='store_true', help='Only show warnings and errors')
    parser.add_argument('--config', help='Update config.json with JSON string')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ── get ────────────────────────────────────────────────────────────
    get_parser = subparsers.add_parser(
        'get',
        help='Download one object',
        description='Download one object and read it back as text.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=GET_EXAMPLES,
    )
    get_parser.add_argument('key', help='Object key')
    get_parser.add_argument('--output', help='Local file path (default: the key)')
    get_parser.add_argument('--no-keep', action='store_true',
                            help='Fetch into memory without writing a local file')
    get_parser.add_argument('--print', action='store_true', help='Print the content to stdout')

    # ── props ──────────────────────────────────────────────────────────
    props_parser = subparsers.add_parser(
        'props',
        help='Download and parse a properties document',
        description='Download one object and parse it as key=value properties.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=PROPS_EXAMPLES,
    )
    props_parser.add_argument('key', help='Object key')
    props_parser.add_argument('--format', choices=['table', 'json'], default='table',
                              help='Output format (default: table)')

    # ── sync ───────────────────────────────────────────────────────────
    sync_parser = subparsers.add_parser(
        'sync',
        help='Download every object under a prefix',
        description='Mirror objects under a key prefix into a local directory.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=SYNC_EXAMPLES,
    )
    sync_parser.add_argument('dest', help='Local destination directory')
    sync_parser.add_argument('--prefix', default='', help='Only download keys starting with this prefix')
    sync_parser.add_argument('--clear', action='store_true',
                             help='Empty the destination data subtree first')
    sync_parser.add_argument('--continue-on-error', action='store_true',
                             help='Keep going when a single object fails')
    sync_parser.add_argument('--strip-prefix', action='store_true',
                             help='Drop the prefix from local paths')

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    # Handle --config (no command needed)
    if args.config:
        return handle_config_update(args.config)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = ConfigLoader.load_config_json()
    except ConfigError as e:
        log.error("%s", e)
        return 1

    config = merge_cli_overrides(config, region=args.region, bucket=args.bucket, profile=args.profile)
    app = BucketPull(config)

    from .modes.get_handler import GetHandler
    from .modes.props_handler import PropsHandler
    from .modes.sync_handler import SyncHandler

    handlers = {
        'get':   lambda: GetHandler(app, args),
        'props': lambda: PropsHandler(app, args),
        'sync':  lambda: SyncHandler(app, args),
    }
    return handlers[args.command]().execute()


if __name__ == '__main__':
    sys.exit(main())
