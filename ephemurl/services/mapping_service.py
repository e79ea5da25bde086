"""Mapping lifecycle service

This module orchestrates the four operations exposed to callers (HTTP
handlers, the CLI, ...) on top of an injected MappingBaseDAO:

    create(long_url, owner_id)            -> short code
    resolve(short_code, owner_id=None)    -> MappingModel
    renew(short_code, owner_id)           -> True
    list(owner_id, page, page_size)       -> MappingPage

Responsibilities:
    - Validate input before touching the data store;
    - Generate unique short codes with a bounded number of attempts;
    - Enforce ownership and expiry on every read;
    - Lazily delete expired records and prune stale owner index entries.

The service holds no mutable state of its own (everything lives in the data
store), so one instance can be shared by all concurrent callers.

Example:
    >>> from ephemurl.dao import MappingRedisDAO
    >>> from ephemurl.services import MappingService

    >>> service = MappingService(MappingRedisDAO(prefix='ephemurl:dev'))
    >>> code = service.create('https://example.com/a', 'owner1')
    >>> service.resolve(code).long_url
    'https://example.com/a'
    >>> service.renew(code, 'owner1')
    True
    >>> service.list('owner1', page=1, page_size=10).total_pages
    1
"""

import math
import logging
import dataclasses
from datetime import timedelta
from collections.abc import Callable

from ephemurl.models import MappingModel, MappingPage
from ephemurl.dao.base import MappingBaseDAO
from ephemurl.dao.exceptions import MalformedRecordError
from ephemurl.exceptions import InvalidInputError, NotFoundError, UnauthorizedError, ExhaustedRetriesError
from ephemurl.utils.helpers import is_valid_url, ttl_seconds, utc_now
from ephemurl.utils.shortener import generate_shortcode
from ephemurl.utils.constants import (
    DEFAULT_LINK_LIFETIME,
    DEFAULT_MAX_CODE_ATTEMPTS,
    DEFAULT_SHORTCODE_LENGTH,
    DEFAULT_PAGE_SIZE,
)


logger = logging.getLogger(__name__)


class MappingService:
    """Create, resolve, renew and list expiring short code mappings.

    Attributes:
        dao (MappingBaseDAO):
            Data store client, constructed and closed by the process entry point.
        lifetime (timedelta):
            Lifetime of a new mapping, and the extension granted by each renewal.
        max_attempts (int):
            Maximum number of candidate codes tried by create().
        code_length (int):
            Length of generated short codes.
        generator (Callable[[int], str]):
            Candidate code generator, called with code_length.
    """

    def __init__(
        self,
        dao: MappingBaseDAO,
        *,
        lifetime: timedelta = DEFAULT_LINK_LIFETIME,
        max_attempts: int = DEFAULT_MAX_CODE_ATTEMPTS,
        code_length: int = DEFAULT_SHORTCODE_LENGTH,
        generator: Callable[[int], str] = generate_shortcode,
    ):
        if lifetime <= timedelta(0):
            raise ValueError(f'Lifetime must be positive (given value: {lifetime}).')
        if max_attempts < 1:
            raise ValueError(f'Max attempts must be a positive integer (given value: {max_attempts}).')

        self.dao = dao
        self.lifetime = lifetime
        self.max_attempts = max_attempts
        self.code_length = code_length
        self.generator = generator

    def create(self, long_url: str, owner_id: str) -> str:
        """Shorten a URL on behalf of an owner

        Args:
            long_url (str): absolute URL to shorten
            owner_id (str): opaque identifier of the caller

        Returns:
            str: the new short code

        Raises:
            InvalidInputError: If owner_id is empty or long_url is not an absolute URL.
            ExhaustedRetriesError: If every candidate code was already taken.
            DataStoreError: On data store connectivity issues.
        """
        _require_owner(owner_id)
        if not is_valid_url(long_url):
            raise InvalidInputError(f"'{long_url}' is not a valid absolute URL.")

        short_code = self._free_short_code()

        created_at = utc_now()
        mapping = MappingModel(
            short_code=short_code,
            long_url=long_url,
            created_at=created_at,
            expires_at=created_at + self.lifetime,
            owner_id=owner_id,
        )
        # NOTE: A concurrent create may pick the same candidate between the
        #       EXISTS check and this write. With 62**5 codes the window is
        #       accepted rather than locked.
        self.dao.insert(mapping, ttl=ttl_seconds(mapping.expires_at, created_at))

        logger.debug(
            'Created mapping.',
            extra={'shortCode': short_code, 'ownerId': owner_id, 'expiresAt': mapping.to_record()['expiresAt']},
        )
        return short_code

    def resolve(self, short_code: str, owner_id: str | None = None) -> MappingModel:
        """Look up a live mapping

        When owner_id is given, the mapping must belong to it. Anonymous
        lookups (owner_id=None or '') resolve any live mapping.

        Raises:
            NotFoundError: If no live mapping exists for the code.
            UnauthorizedError: If owner_id is given and does not own the mapping.
            DataStoreError: On data store connectivity issues.
        """
        return self._load_live(short_code, owner_id)

    def renew(self, short_code: str, owner_id: str) -> bool:
        """Push a live mapping's deadline back by one lifetime

        The extension is added to the current deadline rather than to now,
        so consecutive renewals stack.

        Returns:
            bool: True on success

        Raises:
            InvalidInputError: If owner_id is empty.
            NotFoundError: If no live mapping exists for the code.
            UnauthorizedError: If owner_id does not own the mapping.
            DataStoreError: On data store connectivity issues.
        """
        _require_owner(owner_id)
        mapping = self._load_live(short_code, owner_id)

        renewed = dataclasses.replace(mapping, expires_at=mapping.expires_at + self.lifetime)
        self.dao.set_with_ttl(renewed, ttl=ttl_seconds(renewed.expires_at, utc_now()))

        logger.debug(
            'Renewed mapping.',
            extra={'shortCode': short_code, 'ownerId': owner_id, 'expiresAt': renewed.to_record()['expiresAt']},
        )
        return True

    def list(self, owner_id: str, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> MappingPage:
        """List an owner's live mappings, newest first, one page at a time

        Stale index entries met along the way are reconciled: expired records
        are deleted, and codes whose record is gone or now belongs to another
        owner are pruned from this owner's index. Undecodable records are
        logged and pruned from the index as well.

        Args:
            owner_id (str): opaque identifier of the caller
            page (int): 1-based page number
            page_size (int): maximum number of mappings per page

        Returns:
            MappingPage: the requested slice (empty past the last page) and
                         total_pages, which is never below 1

        Raises:
            InvalidInputError: If owner_id is empty or page/page_size < 1.
            DataStoreError: On data store connectivity issues.
        """
        _require_owner(owner_id)
        if page < 1:
            raise InvalidInputError(f'Page must be a positive integer (given value: {page}).')
        if page_size < 1:
            raise InvalidInputError(f'Page size must be a positive integer (given value: {page_size}).')

        now = utc_now()
        live = []
        for short_code in sorted(self.dao.index_members(owner_id)):
            try:
                mapping = self.dao.get(short_code)
            except MalformedRecordError:
                logger.warning('Skipping undecodable mapping record.', extra={'shortCode': short_code, 'ownerId': owner_id})
                self._prune_index(owner_id, short_code, reason='malformed')
                continue

            if mapping is None:
                self._prune_index(owner_id, short_code, reason='missing')
            elif not mapping.owned_by(owner_id):
                # The code expired for this owner and was reissued to someone else.
                # Only the stale index entry goes; the other owner's live record is kept.
                self._prune_index(owner_id, short_code, reason='reassigned')
            elif not mapping.is_live(now):
                self._expire(mapping)
            else:
                live.append(mapping)

        # list.sort is stable, also with reverse=True
        live.sort(key=lambda m: m.created_at, reverse=True)

        start = (page - 1) * page_size
        return MappingPage(
            items=tuple(live[start : start + page_size]),
            total_pages=max(1, math.ceil(len(live) / page_size)),
            page=page,
            page_size=page_size,
            total=len(live),
        )

    def _free_short_code(self) -> str:
        for attempt in range(1, self.max_attempts + 1):
            candidate = self.generator(self.code_length)
            if not self.dao.exists(candidate):
                return candidate
            logger.debug('Short code collision.', extra={'shortCode': candidate, 'attempt': attempt})

        raise ExhaustedRetriesError(f'No free short code found after {self.max_attempts} attempts.')

    def _load_live(self, short_code: str, owner_id: str | None) -> MappingModel:
        mapping = self.dao.get(short_code)
        if mapping is None:
            raise NotFoundError(f"Short URL '{short_code}' not found or expired.")

        # An empty owner id is an anonymous lookup
        if owner_id and not mapping.owned_by(owner_id):
            raise UnauthorizedError(f"Unauthorized access to short URL '{short_code}'.")

        if not mapping.is_live(utc_now()):
            self._expire(mapping)
            raise NotFoundError(f"Short URL '{short_code}' not found or expired.")

        return mapping

    def _expire(self, mapping: MappingModel) -> None:
        # The record names its owner, so anonymous reads can prune the index too
        self.dao.delete(mapping.short_code)
        self.dao.index_remove(mapping.owner_id, mapping.short_code)
        logger.debug('Lazily expired mapping.', extra={'shortCode': mapping.short_code, 'ownerId': mapping.owner_id})

    def _prune_index(self, owner_id: str, short_code: str, reason: str) -> None:
        self.dao.index_remove(owner_id, short_code)
        logger.debug('Pruned stale owner index entry.', extra={'shortCode': short_code, 'ownerId': owner_id, 'reason': reason})


def _require_owner(owner_id: str | None) -> None:
    if not owner_id or not isinstance(owner_id, str):
        raise InvalidInputError('Owner id is required.')
