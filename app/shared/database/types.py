from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator

class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp that always comes back as UTC.

    Backends without a native timezone type (SQLite) store naive UTC values;
    naive datetimes handed in by callers are taken to be UTC already.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)
