"""Command-line entry point for the mapping service.

This is the process entry point: it initializes logging, loads configuration,
constructs the Redis DAO, injects it into MappingService, runs exactly one
operation and closes the DAO again.

CLI usage:
    $ ephemurl create https://example.com/a --owner owner1
    aB3x9

    $ ephemurl resolve aB3x9
    https://example.com/a

    $ ephemurl renew aB3x9 --owner owner1
    aB3x9 expires at 2026-10-20T12:00:00.000Z

    $ ephemurl list --owner owner1 --page 1 --page-size 10
    aB3x9  https://example.com/a  expires 2026-10-20T12:00:00.000Z
    page 1/1 (1 total)

Exit codes:
    0: success
    1: not found (resolve folds every failure into this one)
    2: invalid input
    3: unauthorized
    4: short code space exhausted
    5: data store or configuration error
"""

import sys
import argparse
import logging

from ephemurl.dao import MappingBaseDAO, MappingRedisDAO
from ephemurl.dao.exceptions import DAOError
from ephemurl.services import MappingService
from ephemurl.exceptions import (
    ConfigurationError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
    ExhaustedRetriesError,
)
from ephemurl.utils import load_config, app_prefix, get_short_url, initialize_logging
from ephemurl.utils.helpers import to_iso8601
from ephemurl.utils.constants import DEFAULT_PAGE_SIZE


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2
EXIT_UNAUTHORIZED = 3
EXIT_EXHAUSTED = 4
EXIT_STORE_ERROR = 5

GENERIC_NOT_FOUND = 'Not found'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ephemurl',
        description='Create, resolve, renew and list expiring short URLs',
    )
    parser.add_argument('--log-level', default=None, help='Log level (default: $LOG_LEVEL or INFO)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    create = subparsers.add_parser('create', help='Shorten a URL')
    create.add_argument('url', help='Absolute URL to shorten')
    create.add_argument('--owner', required=True, help='Opaque owner id')

    resolve = subparsers.add_parser('resolve', help='Print the URL behind a short code')
    resolve.add_argument('code', help='Short code')
    resolve.add_argument('--owner', default=None, help='Only resolve mappings owned by this id')

    renew = subparsers.add_parser('renew', help='Extend a mapping by another lifetime')
    renew.add_argument('code', help='Short code')
    renew.add_argument('--owner', required=True, help='Opaque owner id')

    listing = subparsers.add_parser('list', help="List an owner's live mappings, newest first")
    listing.add_argument('--owner', required=True, help='Opaque owner id')
    listing.add_argument('--page', type=int, default=1, help='1-based page number (default: 1)')
    listing.add_argument('--page-size', type=int, default=DEFAULT_PAGE_SIZE, help=f'Mappings per page (default: {DEFAULT_PAGE_SIZE})')

    return parser


def _run(service: MappingService, args: argparse.Namespace, base_url: str | None) -> int:
    if args.command == 'create':
        short_code = service.create(args.url, args.owner)
        print(get_short_url(short_code, base_url))
        return EXIT_OK

    if args.command == 'resolve':
        # Redirect semantics: never reveal why a lookup failed
        try:
            mapping = service.resolve(args.code, args.owner)
        except (NotFoundError, UnauthorizedError, DAOError) as e:
            logger.info('Resolve failed. Reporting generic not found.', extra={'shortCode': args.code, 'reason': type(e).__name__})
            print(GENERIC_NOT_FOUND, file=sys.stderr)
            return EXIT_NOT_FOUND
        print(mapping.long_url)
        return EXIT_OK

    if args.command == 'renew':
        service.renew(args.code, args.owner)
        mapping = service.resolve(args.code, args.owner)
        print(f'{args.code} expires at {to_iso8601(mapping.expires_at)}')
        return EXIT_OK

    page = service.list(args.owner, page=args.page, page_size=args.page_size)
    for mapping in page.items:
        print(f'{get_short_url(mapping.short_code, base_url)}  {mapping.long_url}  expires {to_iso8601(mapping.expires_at)}')
    print(f'page {page.page}/{page.total_pages} ({page.total} total)')
    return EXIT_OK


def main(argv: list[str] | None = None, dao: MappingBaseDAO | None = None) -> int:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Initialize logging and load configuration
        - Build the DAO (unless one is injected) and the MappingService
        - Run the requested operation and map failures to exit codes
        - Close the DAO if it was built here

    Args:
        argv (list[str] | None): arguments, defaults to sys.argv[1:]
        dao (MappingBaseDAO | None): pre-built DAO; the caller keeps ownership

    Returns:
        int: process exit code
    """
    args = build_parser().parse_args(argv)
    initialize_logging(args.log_level)

    owns_dao = dao is None
    try:
        config = load_config()
        if owns_dao:
            redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
            dao = MappingRedisDAO(**redis_config, prefix=app_prefix())
    except (ConfigurationError, DAOError) as e:
        logger.error('Failed to initialize the data store.', extra={'reason': str(e)})
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_STORE_ERROR

    try:
        service = MappingService(dao, **config['service'])
        return _run(service, args, config['base_url'])
    except InvalidInputError as e:
        print(f'Invalid input: {e}', file=sys.stderr)
        return EXIT_INVALID_INPUT
    except NotFoundError as e:
        print(str(e), file=sys.stderr)
        return EXIT_NOT_FOUND
    except UnauthorizedError as e:
        print(str(e), file=sys.stderr)
        return EXIT_UNAUTHORIZED
    except ExhaustedRetriesError as e:
        logger.error('Short code space exhausted.', extra={'reason': str(e)})
        print(str(e), file=sys.stderr)
        return EXIT_EXHAUSTED
    except DAOError as e:
        logger.error('Data store error.', extra={'reason': str(e)})
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_STORE_ERROR
    finally:
        if owns_dao:
            dao.close()


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
