"""Persistence façade: one entity-typed CRUD API over local + remote storage.

Every call resolves the auth state afresh. Signed in: writes go to the
Local Store first and then to the Record Store (best effort), reads come
from the Record Store and are mirrored locally. Signed out, or no remote
configured: only the Local Store is touched.

Remote failures are logged and swallowed; the local copy is the fallback
of record. A local write the Record Store did not accept is remembered as
pending sync, and remote reads never overwrite a pending record with the
remote copy. No retries and no conflict resolution: last writer wins.
"""

from dataclasses import dataclass
from typing import Callable, TypeVar

import structlog
from pydantic import ValidationError

from .local import (
    ALL_KEYS,
    CHAT_HISTORY_KEY,
    DRAFTS_KEY,
    MEMORIES_KEY,
    PENDING_SYNC_KEY,
    PRODUCTS_KEY,
    PROFILE_KEY,
    LocalStore,
)
from .mappers import (
    MEMORY_MUTABLE,
    draft_from_row,
    draft_to_row,
    memory_from_row,
    memory_to_row,
    memory_update_fields,
    product_from_row,
    product_to_row,
    product_update_fields,
    profile_from_row,
    profile_to_row,
)
from .models import ChatMessage, ContentDraft, Entity, Memory, Product, UserProfile
from .remote import RecordStore, RecordStoreError

logger = structlog.get_logger()

E = TypeVar("E", bound=Entity)

PROFILES_TABLE = "profiles"
MEMORIES_TABLE = "memories"
PRODUCTS_TABLE = "products"
DRAFTS_TABLE = "drafts"

# Pending-sync id for single-row (profile) and whole-collection (drafts) writes
WHOLE = "*"


@dataclass(frozen=True)
class Authenticated:
    user_id: str


@dataclass(frozen=True)
class LocalOnly:
    pass


AuthState = Authenticated | LocalOnly


def in_saved_order(items: list[E], saved: list[E]) -> list[E]:
    """Order items as the local collection has them.

    Records the device has not seen yet keep their remote order and go first.
    """
    position = {item.id: i for i, item in enumerate(saved)}
    fresh = [item for item in items if item.id not in position]
    known = sorted((item for item in items if item.id in position), key=lambda item: position[item.id])
    return fresh + known


class ContentRepository:
    """Entity CRUD that hides the local/remote choice from callers."""

    def __init__(self, local: LocalStore, remote: RecordStore | None = None):
        self.local = local
        self.remote = remote

    def auth_state(self) -> AuthState:
        if self.remote is None:
            return LocalOnly()
        try:
            session = self.remote.get_session()
        except RecordStoreError as e:
            logger.warning("repository.session_check_failed", error=str(e))
            return LocalOnly()
        if session is None:
            return LocalOnly()
        return Authenticated(session.user_id)

    # --- local helpers ---

    def _read_list(self, key: str, model: type[E]) -> list[E]:
        raw = self.local.get_json(key, default=[])
        if not isinstance(raw, list):
            logger.warning("repository.local_blob_not_list", key=key)
            return []
        items = []
        for item in raw:
            try:
                items.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning("repository.local_item_invalid", key=key, error=str(e))
        return items

    def _write_list(self, key: str, items: list[Entity]) -> None:
        self.local.set_json(key, [item.to_local() for item in items])

    # --- pending sync ---

    def pending_sync(self) -> dict[str, dict[str, str]]:
        """Local writes not yet accepted remotely: {table: {record_id: op}}."""
        raw = self.local.get_json(PENDING_SYNC_KEY, default={})
        return raw if isinstance(raw, dict) else {}

    def _set_pending(self, table: str, record_id: str, op: str | None) -> None:
        pending = self.pending_sync()
        records = dict(pending.get(table) or {})
        if records.get(record_id) == op:
            return
        if op is None:
            records.pop(record_id, None)
        else:
            records[record_id] = op
        if records:
            pending[table] = records
        else:
            pending.pop(table, None)
        self.local.set_json(PENDING_SYNC_KEY, pending)

    def _remote_write(
        self, op: str, table: str, record_id: str, action: Callable[[], None]
    ) -> None:
        """Run a remote write and track whether the record is still pending.

        A failed update of a record whose insert also failed stays an insert;
        a successful update does not settle it either, since the row may
        not exist remotely.
        """
        previous = self.pending_sync().get(table, {}).get(record_id)
        try:
            action()
        except RecordStoreError as e:
            logger.warning(
                "repository.remote_write_failed", op=op, table=table, record_id=record_id, error=str(e)
            )
            if not (op == "update" and previous == "insert"):
                self._set_pending(table, record_id, op)
            return
        if op == "update" and previous == "insert":
            return
        self._set_pending(table, record_id, None)

    def _remote_rows(self, table: str, fetch: Callable[[], list[dict]]) -> list[dict] | None:
        try:
            return fetch()
        except RecordStoreError as e:
            logger.warning("repository.remote_read_failed", table=table, error=str(e))
            return None

    def _mirror_remote_list(
        self,
        key: str,
        model: type[E],
        table: str,
        user_id: str,
        order_by: str,
        from_row: Callable[[dict], E],
    ) -> list[E]:
        local_items = self._read_list(key, model)
        pending = self.pending_sync().get(table, {})
        if WHOLE in pending:
            return local_items

        rows = self._remote_rows(table, lambda: self.remote.select(table, user_id, order_by=order_by))
        if not rows:
            return local_items
        try:
            remote_items = [from_row(row) for row in rows]
        except ValidationError as e:
            logger.warning("repository.remote_row_invalid", table=table, error=str(e))
            return local_items

        # Pending records keep their local state; a pending delete stays deleted
        local_by_id = {item.id: item for item in local_items}
        items = []
        for item in remote_items:
            if item.id not in pending:
                items.append(item)
            elif item.id in local_by_id:
                items.append(local_by_id[item.id])
        remote_ids = {item.id for item in remote_items}
        items += [item for item in local_items if item.id in pending and item.id not in remote_ids]

        items = in_saved_order(items, local_items)
        self._write_list(key, items)
        return items

    # --- profile ---

    def load_profile(self) -> UserProfile | None:
        """Stored profile, or None when the user still needs onboarding."""
        match self.auth_state():
            case Authenticated(user_id=user_id):
                if WHOLE in self.pending_sync().get(PROFILES_TABLE, {}):
                    return self._local_profile()
                row = None
                try:
                    row = self.remote.select_one(PROFILES_TABLE, user_id)
                except RecordStoreError as e:
                    logger.warning("repository.remote_read_failed", table=PROFILES_TABLE, error=str(e))
                if row:
                    try:
                        profile = profile_from_row(row)
                    except ValidationError as e:
                        logger.warning("repository.remote_row_invalid", table=PROFILES_TABLE, error=str(e))
                    else:
                        self.local.set_json(PROFILE_KEY, profile.to_local())
                        return profile
                return self._local_profile()
            case LocalOnly():
                return self._local_profile()

    def _local_profile(self) -> UserProfile | None:
        data = self.local.get_json(PROFILE_KEY)
        if not data:
            return None
        try:
            return UserProfile.model_validate(data)
        except ValidationError as e:
            logger.warning("repository.local_item_invalid", key=PROFILE_KEY, error=str(e))
            return None

    def store_profile(self, profile: UserProfile) -> None:
        """Full replace. Local write always lands; remote is best effort."""
        self.local.set_json(PROFILE_KEY, profile.to_local())
        match self.auth_state():
            case Authenticated(user_id=user_id):
                self._remote_write(
                    "upsert",
                    PROFILES_TABLE,
                    WHOLE,
                    lambda: self.remote.upsert(
                        PROFILES_TABLE, [profile_to_row(profile, user_id)], on_conflict="user_id"
                    ),
                )
            case LocalOnly():
                pass

    # --- memories ---

    def list_memories(self) -> list[Memory]:
        """Newest first."""
        match self.auth_state():
            case Authenticated(user_id=user_id):
                return self._mirror_remote_list(
                    MEMORIES_KEY, Memory, MEMORIES_TABLE, user_id, "created_at", memory_from_row
                )
            case LocalOnly():
                return self._read_list(MEMORIES_KEY, Memory)

    def add_memory(self, memory: Memory) -> list[Memory]:
        updated = [memory, *self._read_list(MEMORIES_KEY, Memory)]
        self._write_list(MEMORIES_KEY, updated)
        match self.auth_state():
            case Authenticated(user_id=user_id):
                self._remote_write(
                    "insert",
                    MEMORIES_TABLE,
                    memory.id,
                    lambda: self.remote.insert(MEMORIES_TABLE, memory_to_row(memory, user_id)),
                )
            case LocalOnly():
                pass
        return updated

    def update_memory(self, memory: Memory) -> list[Memory]:
        """Apply the mutable fields to the stored memory with the same id.

        Local and remote apply the same field set, so id, type, created_at
        and source_audio keep their stored values.
        """
        changes = {attr: getattr(memory, attr) for attr in MEMORY_MUTABLE}
        updated = [
            existing.model_copy(update=changes) if existing.id == memory.id else existing
            for existing in self._read_list(MEMORIES_KEY, Memory)
        ]
        self._write_list(MEMORIES_KEY, updated)
        match self.auth_state():
            case Authenticated():
                self._remote_write(
                    "update",
                    MEMORIES_TABLE,
                    memory.id,
                    lambda: self.remote.update(MEMORIES_TABLE, memory.id, memory_update_fields(memory)),
                )
            case LocalOnly():
                pass
        return updated

    def delete_memory(self, memory_id: str) -> list[Memory]:
        updated = [m for m in self._read_list(MEMORIES_KEY, Memory) if m.id != memory_id]
        self._write_list(MEMORIES_KEY, updated)
        match self.auth_state():
            case Authenticated():
                self._remote_write(
                    "delete",
                    MEMORIES_TABLE,
                    memory_id,
                    lambda: self.remote.delete(MEMORIES_TABLE, memory_id),
                )
            case LocalOnly():
                pass
        return updated

    # --- products ---

    def list_products(self) -> list[Product]:
        match self.auth_state():
            case Authenticated(user_id=user_id):
                return self._mirror_remote_list(
                    PRODUCTS_KEY, Product, PRODUCTS_TABLE, user_id, "id", product_from_row
                )
            case LocalOnly():
                return self._read_list(PRODUCTS_KEY, Product)

    def add_product(self, product: Product) -> list[Product]:
        updated = [product, *self._read_list(PRODUCTS_KEY, Product)]
        self._write_list(PRODUCTS_KEY, updated)
        match self.auth_state():
            case Authenticated(user_id=user_id):
                self._remote_write(
                    "insert",
                    PRODUCTS_TABLE,
                    product.id,
                    lambda: self.remote.insert(PRODUCTS_TABLE, product_to_row(product, user_id)),
                )
            case LocalOnly():
                pass
        return updated

    def update_product(self, product: Product) -> list[Product]:
        updated = [
            product if p.id == product.id else p for p in self._read_list(PRODUCTS_KEY, Product)
        ]
        self._write_list(PRODUCTS_KEY, updated)
        match self.auth_state():
            case Authenticated():
                self._remote_write(
                    "update",
                    PRODUCTS_TABLE,
                    product.id,
                    lambda: self.remote.update(
                        PRODUCTS_TABLE, product.id, product_update_fields(product)
                    ),
                )
            case LocalOnly():
                pass
        return updated

    def delete_product(self, product_id: str) -> list[Product]:
        updated = [p for p in self._read_list(PRODUCTS_KEY, Product) if p.id != product_id]
        self._write_list(PRODUCTS_KEY, updated)
        match self.auth_state():
            case Authenticated():
                self._remote_write(
                    "delete",
                    PRODUCTS_TABLE,
                    product_id,
                    lambda: self.remote.delete(PRODUCTS_TABLE, product_id),
                )
            case LocalOnly():
                pass
        return updated

    # --- drafts ---

    def list_drafts(self) -> list[ContentDraft]:
        """Drafts in saved order; drafts new to this device come first."""
        match self.auth_state():
            case Authenticated(user_id=user_id):
                return self._mirror_remote_list(
                    DRAFTS_KEY, ContentDraft, DRAFTS_TABLE, user_id, "date", draft_from_row
                )
            case LocalOnly():
                return self._read_list(DRAFTS_KEY, ContentDraft)

    def save_drafts(self, drafts: list[ContentDraft]) -> list[ContentDraft]:
        """Replace the whole draft collection, locally and remotely."""
        self._write_list(DRAFTS_KEY, drafts)
        match self.auth_state():
            case Authenticated(user_id=user_id):

                def replace_remote():
                    self.remote.upsert(DRAFTS_TABLE, [draft_to_row(d, user_id) for d in drafts])
                    self.remote.delete_missing(DRAFTS_TABLE, user_id, [d.id for d in drafts])

                self._remote_write("upsert", DRAFTS_TABLE, WHOLE, replace_remote)
            case LocalOnly():
                pass
        return list(drafts)

    # --- chat history (device only) ---

    def load_chat_history(self) -> list[ChatMessage]:
        return self._read_list(CHAT_HISTORY_KEY, ChatMessage)

    def store_chat_history(self, messages: list[ChatMessage]) -> None:
        self._write_list(CHAT_HISTORY_KEY, messages)

    def clear_chat_history(self) -> None:
        self.local.remove(CHAT_HISTORY_KEY)

    def clear_all_data(self) -> None:
        """Hard reset of this device's copy. Remote rows are untouched."""
        for key in ALL_KEYS:
            self.local.remove(key)
        logger.info("repository.local_data_cleared")
