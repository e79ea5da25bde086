"""Abstract base class for mapping data access objects (DAOs).

This class establishes a consistent contract for all mapping DAO implementations,
regardless of the underlying key-value store.

Responsibilities:
    - Provide single-key operations on mapping records, addressed by short code.
    - Provide set-membership operations on the per-owner index of short codes.
    - Standardize error handling across data store implementations.

The DAO holds no business rules: expiry checks, ownership checks and index
reconciliation belong to MappingService.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from ephemurl.dao import MappingRedisDAO

        >>> dao = MappingRedisDAO(prefix='ephemurl:dev')
        >>> dao.insert(mapping, ttl=172800)

        >>> dao.get('aB3x9').long_url
        'https://example.com/a'

        >>> dao.index_members('owner1')
        {'aB3x9'}
"""

from abc import ABC, abstractmethod

from ephemurl.models import MappingModel


class MappingBaseDAO(ABC):
    """Interface for mapping data access objects (DAOs).

    Methods:
        exists(short_code: str) -> bool:
            Check whether a record is stored under the short code.

        get(short_code: str) -> MappingModel | None:
            Retrieve a record by short code, None if absent.
            Raises MalformedRecordError if the stored record cannot be decoded.

        set_with_ttl(mapping: MappingModel, ttl: int) -> MappingBaseDAO:
            Write (or overwrite) a record which the store evicts after ttl seconds.

        insert(mapping: MappingModel, ttl: int) -> MappingBaseDAO:
            Write a record with a TTL and add it to its owner's index.

        delete(short_code: str) -> bool:
            Delete a record. Returns False if nothing was deleted.

        index_add(owner_id: str, short_code: str) -> MappingBaseDAO
        index_remove(owner_id: str, short_code: str) -> MappingBaseDAO
        index_members(owner_id: str) -> set[str]:
            Maintain and read the per-owner set of short codes.

    All methods raise DataStoreError on connection or I/O failures.

    Subclassing:
        Datastore-specific implementations (e.g., MappingRedisDAO) must extend
        this class and implement all abstract methods.
    """

    @abstractmethod
    def exists(self, short_code: str, **kwargs) -> bool:
        """Check whether a record exists for the short code.

        Args:
            short_code (str):
                The short code to look up.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if a record is stored (live or not), False otherwise.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_code: str, **kwargs) -> MappingModel | None:
        """Retrieve a MappingModel from the data store by its short code.

        Args:
            short_code (str):
                The short code of the MappingModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            MappingModel | None: The MappingModel instance if found, otherwise None.

        Raises:
            MalformedRecordError:
                If the stored record cannot be decoded.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set_with_ttl(self, mapping: MappingModel, ttl: int, **kwargs) -> 'MappingBaseDAO':
        """Write a record that the data store evicts after ttl seconds.

        Args:
            mapping (MappingModel):
                The mapping to persist under its short code.

            ttl (int):
                Time-To-Live in whole seconds. Must be >= 1.

        Returns:
            MappingBaseDAO: self (for method chaining)

        Raises:
            ValueError:
                If ttl is below one second.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, mapping: MappingModel, ttl: int, **kwargs) -> 'MappingBaseDAO':
        """Write a new record with a TTL and add its code to the owner's index.

        Implementations should perform both writes atomically when the data
        store supports multi-key transactions.

        Returns:
            MappingBaseDAO: self (for method chaining)

        Raises:
            ValueError:
                If ttl is below one second.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, short_code: str, **kwargs) -> bool:
        """Delete the record stored under the short code.

        Returns:
            bool: True if a record was deleted, False if none existed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def index_add(self, owner_id: str, short_code: str, **kwargs) -> 'MappingBaseDAO':
        """Add a short code to the owner's index."""
        pass

    @abstractmethod
    def index_remove(self, owner_id: str, short_code: str, **kwargs) -> 'MappingBaseDAO':
        """Remove a short code from the owner's index. Removing an absent code is a no-op."""
        pass

    @abstractmethod
    def index_members(self, owner_id: str, **kwargs) -> set[str]:
        """Return every short code in the owner's index (empty set if none)."""
        pass

    def close(self) -> None:  # noqa: B027
        """Release data store resources. No-op unless overridden."""
