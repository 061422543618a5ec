# pickbook/services/store.py
"""
Redis storage for reservations and settings.

Keys (from config):
  pick:reservations  STRING  JSON list of Reservation, insertion order
  pick:settings      STRING  JSON CapacitySettings
  pick:audit         LIST    JSON audit entries, oldest first

Writes go through apply(): WATCH both documents, read a snapshot, run the
mutation, then MULTI/EXEC. A concurrent writer makes EXEC fail with
WatchError and the whole read-validate-write cycle is retried, so two
bookings can never both pass validation against the same stale snapshot.
Nothing is written unless EXEC succeeds.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError
from redis import Redis
from redis.exceptions import RedisError, WatchError

from ..config import Settings, settings as app_settings
from ..exceptions import ConcurrentModification, PersistenceFailure
from ..schemas.reservations import Reservation
from ..schemas.settings import CapacitySettings
from .capacity import merge_with_defaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mutation:
    """
    What a transaction wants to commit.

    reservations / settings left as None are not written.
    """
    result: Any = None
    reservations: Optional[list[Reservation]] = None
    settings: Optional[CapacitySettings] = None
    audit: tuple[dict, ...] = field(default_factory=tuple)

    @property
    def has_writes(self) -> bool:
        return self.reservations is not None or self.settings is not None or bool(self.audit)


def audit_entry(event_type: str, reservation: Reservation | None = None, payload: dict | None = None) -> dict:
    """Build one audit record; reservation snapshot goes into payload."""
    if reservation is not None:
        payload = {**(payload or {}), "reservation": reservation.model_dump(mode="json")}
    return {
        "event_type": event_type,
        "reservation_id": reservation.id if reservation is not None else None,
        "payload": payload,
        "created_at": datetime.now().isoformat(),
    }


class ReservationStore:
    """Redis wrapper for the reservation and settings documents."""

    def __init__(self, redis: Redis, config: Settings | None = None):
        self.redis = redis
        self.config = config or app_settings

    # ── Decode ───────────────────────────────────────────────────────────

    @staticmethod
    def _decode_reservations(raw) -> list[Reservation]:
        if raw is None:
            return []
        try:
            items = json.loads(raw)
            return [Reservation.model_validate(item) for item in items]
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            raise PersistenceFailure(f"Stored reservations are unreadable: {e}") from e

    @staticmethod
    def _decode_settings(raw) -> CapacitySettings:
        if raw is None:
            return merge_with_defaults(None)
        try:
            stored = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            raise PersistenceFailure(f"Stored settings are unreadable: {e}") from e
        if not isinstance(stored, dict):
            raise PersistenceFailure("Stored settings are not a JSON object")
        return merge_with_defaults(stored)

    @staticmethod
    def _encode_reservations(reservations: list[Reservation]) -> str:
        return json.dumps(
            [r.model_dump(mode="json") for r in reservations],
            ensure_ascii=False,
        )

    # ── Read ─────────────────────────────────────────────────────────────

    def load_reservations(self) -> list[Reservation]:
        try:
            raw = self.redis.get(self.config.reservations_key)
        except RedisError as e:
            logger.exception("Failed to load reservations")
            raise PersistenceFailure("Reservation store unavailable") from e
        return self._decode_reservations(raw)

    def load_settings(self) -> CapacitySettings:
        try:
            raw = self.redis.get(self.config.settings_key)
        except RedisError as e:
            logger.exception("Failed to load settings")
            raise PersistenceFailure("Settings store unavailable") from e
        return self._decode_settings(raw)

    def load_audit(self, limit: int = 100) -> list[dict]:
        """Audit entries, newest first."""
        try:
            raw = self.redis.lrange(self.config.audit_key, -limit, -1)
        except RedisError as e:
            logger.exception("Failed to load audit log")
            raise PersistenceFailure("Audit log unavailable") from e
        try:
            return [json.loads(item) for item in reversed(raw)]
        except (json.JSONDecodeError, TypeError) as e:
            raise PersistenceFailure(f"Stored audit log is unreadable: {e}") from e

    # ── Write ────────────────────────────────────────────────────────────

    def apply(self, mutate: Callable[[list[Reservation], CapacitySettings], Mutation]) -> Any:
        """
        Run mutate against a consistent snapshot and commit its writes.

        mutate may be called several times (once per retry), so it must
        be a pure function of its arguments. Exceptions raised by mutate
        abort the transaction and propagate unchanged.

        Returns:
            Mutation.result of the committed attempt.

        Raises:
            ConcurrentModification: every retry lost to another writer.
            PersistenceFailure: Redis error or unreadable document.
        """
        keys = (self.config.reservations_key, self.config.settings_key)
        retries = max(1, self.config.store_max_retries)

        for attempt in range(1, retries + 1):
            try:
                with self.redis.pipeline() as pipe:
                    pipe.watch(*keys)
                    reservations = self._decode_reservations(pipe.get(self.config.reservations_key))
                    current_settings = self._decode_settings(pipe.get(self.config.settings_key))

                    mutation = mutate(reservations, current_settings)
                    if not mutation.has_writes:
                        pipe.unwatch()
                        return mutation.result

                    pipe.multi()
                    if mutation.reservations is not None:
                        pipe.set(
                            self.config.reservations_key,
                            self._encode_reservations(mutation.reservations),
                        )
                    if mutation.settings is not None:
                        pipe.set(
                            self.config.settings_key,
                            mutation.settings.model_dump_json(),
                        )
                    for entry in mutation.audit:
                        pipe.rpush(self.config.audit_key, json.dumps(entry, ensure_ascii=False))
                    pipe.execute()
                    return mutation.result

            except WatchError:
                logger.warning(f"Store write conflict, retry {attempt}/{retries}")
                continue
            except RedisError as e:
                logger.exception("Store transaction failed")
                raise PersistenceFailure("Reservation store unavailable") from e

        raise ConcurrentModification(f"Gave up after {retries} conflicting attempts")
