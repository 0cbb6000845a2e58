"""Command-line interface for tinifier

This CLI follows this procedure for every command:
- Step 1: Parse CLI arguments
- Step 2: Initialize logging and load the backend configuration
- Step 3: Build the persistence backend
- Step 4: Run the requested operation and print its result

CLI usage:
    $ tinifier add https://example.com/blog/article-123
    $ tinifier view b7fK2a
    $ tinifier view b7fK2a --long
    $ tinifier edit b7fK2a --long-url https://example.com/blog/article-456
    $ tinifier edit b7fK2a --expires 2027-01-01T00:00:00+00:00 --author alice
    $ tinifier remove b7fK2a
    $ tinifier --backend redis add https://example.com

Exit codes:
    0: success
    1: entry not found, or a tinifier/data store error
    2: invalid command-line arguments (argparse)
"""

import argparse
import logging
from datetime import datetime

from rich.console import Console
from rich.text import Text

from tinifier import __version__
from tinifier.constants import Backend, ENV
from tinifier.exceptions import TinifierError
from tinifier.models import UrlEntry, UrlEntryRequest
from tinifier.dao.exceptions import DAOError
from tinifier.operations import create_store, add_url, edit_entry, get_url, remove_url
from tinifier.utils import initialize_logging, load_config, resolve_author


logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

LABEL_STYLE = 'rgb(135,135,135)'


def _timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f'invalid ISO-8601 timestamp: {value!r}') from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tinifier',
        description='Shorten long URLs into deterministic short codes and manage the stored mappings.',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '--backend',
        choices=[backend.value for backend in Backend],
        default=None,
        help=f'Persistence backend (default: ${ENV.Tinifier.BACKEND} or the configured one)',
    )
    parser.add_argument(
        '--file',
        default=None,
        help=f'Entry file used by the file backend (default: ${ENV.Tinifier.FILE} or the configured one)',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug information to stderr')

    subparsers = parser.add_subparsers(dest='command', required=True)

    add = subparsers.add_parser('add', help='Shorten a URL')
    add.add_argument('long_url', help='URL to shorten')

    view = subparsers.add_parser('view', help='Show the URL behind a short code')
    view.add_argument('short_url', help='Short code to look up')
    view.add_argument('-l', '--long', action='store_true', help='Show full entry information')

    edit = subparsers.add_parser('edit', help='Show or update an entry')
    edit.add_argument('short_url', help='Short code of the entry')
    edit.add_argument('--long-url', default=None, help='New destination URL')
    edit.add_argument('--expires', type=_timestamp, default=None, help='New expiration date (ISO-8601)')
    edit.add_argument('--author', default=None, help='Reassign the entry to this author')

    remove = subparsers.add_parser('remove', help='Remove an entry')
    remove.add_argument('short_url', help='Short code of the entry')

    return parser


def render_entry(entry: UrlEntry, indent: str = '') -> Text:
    # fmt: off
    fields = [
        ('Long URL: ', entry.long_url),
        ('Short URL: ', entry.short_url),
        ('Expiration Date: ', str(entry.expiration_date)),
        ('Creation Date: ', entry.creation_date.isoformat()),
        ('Author: ', entry.author),
    ]
    # fmt: on
    return Text('\n').join(Text.assemble(indent, (label, LABEL_STYLE), value) for label, value in fields)


def _not_found() -> int:
    console.print('Not Found', style='bold red')
    return 1


def _show(short_url: str, entry: UrlEntry, full: bool) -> None:
    if full:
        console.print(Text.assemble((short_url, 'green'), ' =>'))
        console.print(render_entry(entry, indent='\t'))
    else:
        console.print(Text.assemble((short_url, 'green'), ' => ', entry.long_url))


def run(args: argparse.Namespace) -> int:
    config = load_config(backend=args.backend)
    if args.file and Backend.FILE in config:
        config[Backend.FILE]['path'] = args.file
    store = create_store(config)

    match args.command:
        case 'add':
            entry = add_url(args.long_url, store, author=resolve_author())
            console.print('ADDED:', style='bold green')
            console.print(render_entry(entry, indent='\t'))

        case 'view':
            entry = get_url(args.short_url, store)
            if entry is None:
                return _not_found()
            _show(args.short_url, entry, full=args.long)

        case 'edit':
            if args.long_url is None and args.expires is None and args.author is None:
                entry = get_url(args.short_url, store)
            else:
                request = UrlEntryRequest(
                    author=args.author or resolve_author(),
                    long_url=args.long_url,
                    short_url=args.short_url,
                    expiration_date=args.expires,
                )
                entry = edit_entry(args.short_url, request, store, reassign_author=args.author is not None)
            if entry is None:
                return _not_found()
            _show(args.short_url, entry, full=True)

        case 'remove':
            entry = remove_url(args.short_url, store)
            if entry is None:
                return _not_found()
            console.print(Text.assemble(('REMOVED: ', 'bold green'), (args.short_url, 'green')))
            console.print(render_entry(entry, indent='\t'))

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        int: process exit code.
    """
    args = build_parser().parse_args(argv)
    initialize_logging('DEBUG' if args.verbose else None)

    try:
        return run(args)
    except (TinifierError, DAOError, FileNotFoundError, ValueError) as e:
        logger.debug('Command failed.', exc_info=True, extra={'command': args.command})
        err_console.print(Text(f'Error: {e}', style='bold red'))
        return 1
