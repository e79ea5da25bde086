from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ephemurl.utils.helpers import to_iso8601, from_iso8601


@dataclass(frozen=True)
class MappingModel:
    """Represent a short code to long URL mapping with an expiry deadline.

    Attributes:
        short_code (str):
            The unique short identifier of the mapping.
        long_url (str):
            The original absolute URL that the short code resolves to.
        created_at (datetime):
            Creation time (UTC). Never changes after creation.
        expires_at (datetime):
            Deadline (UTC) after which the mapping is no longer live.
            Only renewal moves it, always forward.
        owner_id (str):
            Opaque identifier of the caller that created the mapping.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> mapping = MappingModel(
        ...     short_code='aB3x9',
        ...     long_url='https://example.com/article/123',
        ...     created_at=now,
        ...     expires_at=now + timedelta(hours=48),
        ...     owner_id='owner1',
        ... )
        >>> mapping.is_live(now)
        True
        >>> mapping.to_record()['shortUrl']
        'aB3x9'
    """

    short_code: str
    long_url: str
    created_at: datetime
    expires_at: datetime
    owner_id: str

    def is_live(self, now: datetime) -> bool:
        """Return True if the mapping's deadline is strictly after now."""
        return self.expires_at > now

    def owned_by(self, owner_id: str) -> bool:
        return self.owner_id == owner_id

    def to_record(self) -> dict[str, str]:
        """Serialize into the persisted record layout (camelCase, ISO-8601 timestamps)."""
        return {
            'shortUrl': self.short_code,
            'longUrl': self.long_url,
            'createdAt': to_iso8601(self.created_at),
            'expiresAt': to_iso8601(self.expires_at),
            'ownerId': self.owner_id,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> 'MappingModel':
        """Build a MappingModel from its persisted record layout.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If a timestamp is not valid ISO-8601.
            TypeError: If a field has the wrong type.
        """
        return cls(
            short_code=record['shortUrl'],
            long_url=record['longUrl'],
            created_at=from_iso8601(record['createdAt']),
            expires_at=from_iso8601(record['expiresAt']),
            owner_id=record['ownerId'],
        )
