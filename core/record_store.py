# core/record_store.py

"""
Record Store: the four console collections (admins, workers, offices,
work_categories) as Supabase tables.

Nested record sections (personal_info, work_info, basic_info, ...) are
JSON columns, so filters may address a JSON path with PostgREST's
`column->>key` syntax, e.g. {"work_info->>category_id": "c1"}.

Live subscriptions are fanned out in-process: a subscriber receives the
current snapshot when it subscribes and again after every write made
through the same store instance.
"""

from collections import defaultdict
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from supabase import Client

from core.errors import store_error
from core.logging_config import logger
from core.utils import sanitize


Filters = Optional[Dict[str, Any]]
SnapshotCallback = Callable[[List[dict]], None]


class Subscription:
    """
    Handle returned by RecordStore.subscribe().

    Use as a context manager so the subscription is released on every
    exit path:

        with store.subscribe("workers", on_change):
            ...
    """

    def __init__(self, store: "RecordStore", collection: str, callback: SnapshotCallback, filters: Filters):
        self._store = store
        self.collection = collection
        self.callback = callback
        self.filters = dict(filters or {})
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._store._remove_subscription(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class RecordStore:
    def __init__(self, client: Client):
        self._client = client
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)
        self._lock = Lock()

    # =================================================================
    #  ONE-SHOT READS
    # =================================================================

    def get_one(self, collection: str, record_id: str) -> Optional[dict]:
        try:
            res = (
                self._client.table(str(collection))
                .select("*")
                .eq("id", record_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Fetching {collection} record")

        return res.data[0] if res.data else None

    def get_all(self, collection: str, filters: Filters = None) -> List[dict]:
        try:
            query = self._client.table(str(collection)).select("*")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            res = query.execute()
        except Exception as e:
            raise store_error(e, f"Fetching {collection}")

        return res.data or []

    def count(self, collection: str, filters: Filters = None) -> int:
        try:
            query = self._client.table(str(collection)).select("id", count="exact")
            for key, val in (filters or {}).items():
                query = query.eq(key, val)
            res = query.execute()
        except Exception as e:
            raise store_error(e, f"Counting {collection}")

        if res.count is not None:
            return res.count
        return len(res.data or [])

    def count_ignore_case(self, collection: str, column: str, value: str) -> int:
        """Count rows whose `column` equals `value` ignoring case (ILIKE with wildcards escaped)."""
        pattern = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        try:
            res = (
                self._client.table(str(collection))
                .select("id", count="exact")
                .ilike(column, pattern)
                .execute()
            )
        except Exception as e:
            raise store_error(e, f"Counting {collection}")

        if res.count is not None:
            return res.count
        return len(res.data or [])

    # =================================================================
    #  WRITES
    # =================================================================

    def create(self, collection: str, data: dict, record_id: Optional[str] = None) -> str:
        """Insert a record and return its id (generated unless record_id is given)."""
        payload = sanitize(data)
        if record_id is not None:
            payload["id"] = record_id

        try:
            res = self._client.table(str(collection)).insert(payload).execute()
        except Exception as e:
            raise store_error(e, f"Creating {collection} record")

        if not res.data:
            raise store_error(RuntimeError("Insert returned no data"), f"Creating {collection} record")

        new_id = str(res.data[0]["id"])
        self._notify(collection)
        return new_id

    def update(self, collection: str, record_id: str, data: dict) -> None:
        """
        Top-level keys replace the stored value; there is no merge into
        JSON columns, so callers send complete nested sections.
        """
        try:
            self._client.table(str(collection)).update(sanitize(data)).eq("id", record_id).execute()
        except Exception as e:
            raise store_error(e, f"Updating {collection} record")

        self._notify(collection)

    def delete(self, collection: str, record_id: str) -> None:
        try:
            self._client.table(str(collection)).delete().eq("id", record_id).execute()
        except Exception as e:
            raise store_error(e, f"Deleting {collection} record")

        self._notify(collection)

    # =================================================================
    #  LIVE SUBSCRIPTIONS
    # =================================================================

    def subscribe(self, collection: str, callback: SnapshotCallback, filters: Filters = None) -> Subscription:
        """
        Register a snapshot listener. The callback fires immediately with
        the current rows, then after every write to `collection`.
        """
        subscription = Subscription(self, str(collection), callback, filters)
        with self._lock:
            self._subscriptions[subscription.collection].append(subscription)

        try:
            self._deliver(subscription)
        except Exception:
            subscription.unsubscribe()
            raise

        return subscription

    def subscriber_count(self, collection: str) -> int:
        with self._lock:
            return len(self._subscriptions.get(str(collection), []))

    def _remove_subscription(self, subscription: Subscription) -> None:
        with self._lock:
            subs = self._subscriptions.get(subscription.collection, [])
            if subscription in subs:
                subs.remove(subscription)

    def _deliver(self, subscription: Subscription) -> None:
        rows = self.get_all(subscription.collection, subscription.filters)
        if subscription.active:
            subscription.callback(rows)

    def _notify(self, collection: str) -> None:
        with self._lock:
            subs = list(self._subscriptions.get(str(collection), []))

        for subscription in subs:
            try:
                self._deliver(subscription)
            except Exception as e:
                # write already committed; listener failures are only logged
                logger.error(
                    f"Subscription callback on {collection} failed: {e}",
                    exc_info=True,
                )
