import json
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Any


TIMESTAMP_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


@dataclass(frozen=True)
class URLDetailModel:
    """Represent the metadata of a shortening event (Detail Record).

    Attributes:
        url (str):
            The original long URL that the short code redirects to.
        created_at (datetime):
            Moment the short code was allocated (UTC).
        expiration_in_minutes (int):
            Time-To-Live(TTL) window the short code was created with.

    Example:
        >>> from datetime import datetime, UTC
        >>> detail = URLDetailModel(
        ...     url="https://www.baidu.com",
        ...     created_at=datetime(2019, 12, 12, 12, 12, 12, tzinfo=UTC),
        ...     expiration_in_minutes=60,
        ... )
        >>> detail.to_json()
        '{"url": "https://www.baidu.com", "created_at": "2019-12-12T12:12:12Z", "expiration_in_minutes": 60}'
        >>> URLDetailModel.from_json(detail.to_json()) == detail
        True
    """

    url: str
    created_at: datetime
    expiration_in_minutes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            'url': self.url,
            'created_at': self.created_at.astimezone(UTC).strftime(TIMESTAMP_FORMAT),
            'expiration_in_minutes': self.expiration_in_minutes,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> 'URLDetailModel':
        """Decode a serialized Detail Record

        Raises:
            ValueError: if raw is not a JSON object with the expected fields.
        """
        try:
            data = json.loads(raw)
            url = data['url']
            created_at = datetime.strptime(data['created_at'], TIMESTAMP_FORMAT).replace(tzinfo=UTC)
            expiration_in_minutes = data['expiration_in_minutes']
        except (TypeError, KeyError) as e:
            raise ValueError(f'Malformed detail record: {raw!r}') from e

        if not isinstance(url, str) or not isinstance(expiration_in_minutes, int) or isinstance(expiration_in_minutes, bool):
            raise ValueError(f'Malformed detail record: {raw!r}')

        return cls(url=url, created_at=created_at, expiration_in_minutes=expiration_in_minutes)
