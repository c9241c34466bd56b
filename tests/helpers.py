"""Test doubles and entity builders shared across test modules."""

from shared_types import DraftStatus, MemoryType, Platform
from store.models import ContentDraft, Memory, Product
from store.remote import RecordStore, RecordStoreError, Session


class FakeRecordStore(RecordStore):
    """In-memory record store that records every call.

    ``session`` None means signed out. ``fail_rows`` makes every row
    operation raise, ``fail_session`` makes the session check raise.
    """

    def __init__(self, session: Session | None = None):
        self.session = session
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple] = []
        self.fail_rows = False
        self.fail_session = False

    def _check(self, op, table):
        self.calls.append((op, table))
        if self.fail_rows:
            raise RecordStoreError(f"{op} {table}: connection refused")

    def get_session(self):
        self.calls.append(("get_session", None))
        if self.fail_session:
            raise RecordStoreError("auth server unreachable")
        return self.session

    def select(self, table, user_id, order_by=None, limit=None):
        self._check("select", table)
        rows = [dict(r) for r in self.tables.get(table, []) if r.get("user_id") == user_id]
        if order_by and any(order_by not in r for r in rows):
            raise RecordStoreError(f"column {table}.{order_by} does not exist")
        if order_by:
            rows.sort(key=lambda r: r.get(order_by) or "", reverse=True)
        return rows[:limit] if limit else rows

    def insert(self, table, row):
        self._check("insert", table)
        self.tables.setdefault(table, []).append(dict(row))

    def update(self, table, record_id, fields):
        self._check("update", table)
        for row in self.tables.get(table, []):
            if row.get("id") == record_id:
                row.update(fields)

    def delete(self, table, record_id):
        self._check("delete", table)
        self.tables[table] = [r for r in self.tables.get(table, []) if r.get("id") != record_id]

    def upsert(self, table, rows, on_conflict="id"):
        self._check("upsert", table)
        existing = self.tables.setdefault(table, [])
        for row in rows:
            match = next((r for r in existing if r.get(on_conflict) == row.get(on_conflict)), None)
            if match is not None:
                match.update(row)
            else:
                existing.append(dict(row))

    def delete_missing(self, table, user_id, keep_ids):
        self._check("delete_missing", table)
        keep = set(keep_ids)
        self.tables[table] = [
            r
            for r in self.tables.get(table, [])
            if r.get("user_id") != user_id or r.get("id") in keep
        ]

    def row_calls(self):
        return [c for c in self.calls if c[0] not in ("get_session", "close")]

    def close(self):
        self.calls.append(("close", None))


def make_memory(memory_id="m1", type=MemoryType.STORY, created_at="2024-01-01T10:00:00+00:00", **kw):
    data = {
        "id": memory_id,
        "type": type,
        "title": f"Title {memory_id}",
        "content": f"Content of {memory_id}",
        "tags": ["tag"],
        "created_at": created_at,
    }
    data.update(kw)
    return Memory(**data)


def make_product(product_id="p1", **kw):
    return Product(**{"id": product_id, "name": f"Product {product_id}", **kw})


def make_draft(draft_id="d1", date="2024-01-01T10:00:00+00:00", **kw):
    data = {
        "id": draft_id,
        "title": f"Draft {draft_id}",
        "content": "Body",
        "platform": Platform.LINKEDIN,
        "status": DraftStatus.DRAFT,
        "date": date,
    }
    data.update(kw)
    return ContentDraft(**data)
