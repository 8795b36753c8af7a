"""
Key-value blob stores.

Both backends behave like a browser's localStorage: string keys map to
string values, writes replace the whole value, and keys are partitioned
by namespace so one store can hold many independent devices.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Interface shared by every backend."""

    @abstractmethod
    def get_item(self, namespace, key):
        """Return the stored string, or None when the key is absent."""

    @abstractmethod
    def set_item(self, namespace, key, value):
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, namespace, key):
        """Delete ``key``. Missing keys are ignored."""

    @abstractmethod
    def clear(self, namespace):
        """Delete every key in ``namespace``."""


class MemoryKeyValueStore(KeyValueStore):
    """In-process store, used by the test suite and STORAGE_BACKEND=memory."""

    def __init__(self):
        self._data = {}

    def get_item(self, namespace, key):
        return self._data.get(namespace, {}).get(key)

    def set_item(self, namespace, key, value):
        self._data.setdefault(namespace, {})[key] = value

    def remove_item(self, namespace, key):
        self._data.get(namespace, {}).pop(key, None)

    def clear(self, namespace):
        self._data.pop(namespace, None)


class MySQLKeyValueStore(KeyValueStore):
    """Store backed by the ``kv_store`` table (see schema.sql)."""

    def __init__(self, pool):
        self.pool = pool

    def get_item(self, namespace, key):
        conn = self.pool.get_connection()
        try:
            with conn.cursor(dictionary=True) as cur:
                cur.execute(
                    "SELECT item_value FROM kv_store WHERE namespace=%s AND item_key=%s",
                    (namespace, key)
                )
                row = cur.fetchone()
        finally:
            conn.close()
        return row['item_value'] if row else None

    def set_item(self, namespace, key, value):
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    "INSERT INTO kv_store (namespace, item_key, item_value) VALUES (%s, %s, %s) "
                    "ON DUPLICATE KEY UPDATE item_value=VALUES(item_value)",
                    (namespace, key, value)
                )
                conn.commit()
        finally:
            conn.close()

    def remove_item(self, namespace, key):
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM kv_store WHERE namespace=%s AND item_key=%s", (namespace, key))
                conn.commit()
        finally:
            conn.close()

    def clear(self, namespace):
        conn = self.pool.get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM kv_store WHERE namespace=%s", (namespace,))
                conn.commit()
        finally:
            conn.close()
