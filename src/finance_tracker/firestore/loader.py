from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from pydantic import ValidationError

from ..analytics.models import ParsedLedger
from ..analytics.parse import DEFAULT_CURRENCY_PREFIX, parse_records
from ..config import Settings
from .client import FirestoreClient, FirestoreError
from .models import RawTransaction

logger = logging.getLogger(__name__)

LoadStatus = Literal["ready", "failed"]


class TransactionSource(Protocol):
    def fetch(self) -> list[RawTransaction]: ...


@dataclass(frozen=True)
class LoadState:
    status: LoadStatus
    ledger: ParsedLedger
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "ready"


class FirestoreSource:
    def __init__(self, settings: Settings, client: FirestoreClient | None = None):
        self._settings = settings
        self._client = client

    def fetch(self) -> list[RawTransaction]:
        s = self._settings
        if self._client is not None:
            return self._client.list_transactions(s.firestore_collection)

        try:
            s.validate_firestore()
        except ValueError as e:
            raise FirestoreError(str(e)) from e

        with FirestoreClient(
            project_id=s.firestore_project_id or "",
            api_key=s.firestore_api_key,
            database=s.firestore_database,
            base_url=s.firestore_base_url,
            timeout=s.http_timeout_seconds,
        ) as client:
            return client.list_transactions(s.firestore_collection)


class JsonFileSource:
    """
    Local snapshot: a JSON list of transaction documents
    ({"id", "vendor", "amount", "date", "category", "type"}).
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def fetch(self) -> list[RawTransaction]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise FirestoreError(f"Cannot read snapshot {self.path}: {e}") from e

        if not isinstance(data, list):
            raise FirestoreError(f"Snapshot {self.path} is not a JSON list")

        out: list[RawTransaction] = []
        for i, obj in enumerate(data):
            if not isinstance(obj, dict):
                raise FirestoreError(f"Snapshot entry #{i} is not an object")
            obj = dict(obj)
            obj.setdefault("id", str(i))
            try:
                out.append(RawTransaction.model_validate(obj))
            except ValidationError as e:
                raise FirestoreError(f"Snapshot entry #{i} is malformed: {e}") from e
        return out


def load_ledger(source: TransactionSource, prefix: str = DEFAULT_CURRENCY_PREFIX) -> LoadState:
    """
    Load and parse the whole collection once.

    Never raises for storage problems: they come back as a failed state, and
    retrying means calling this again.
    """
    try:
        raw = source.fetch()
    except FirestoreError as e:
        logger.warning("Transaction load failed: %s", e)
        return LoadState(status="failed", ledger=ParsedLedger(transactions=()), error=str(e))

    ledger = parse_records(raw, prefix=prefix)
    logger.info(
        "Ledger ready: %d transactions, %d rejected", len(ledger.transactions), len(ledger.rejected)
    )
    return LoadState(status="ready", ledger=ledger)
