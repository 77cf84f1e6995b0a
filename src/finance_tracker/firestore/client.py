from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .models import RawTransaction, RunQueryItem

logger = logging.getLogger(__name__)


class FirestoreError(RuntimeError):
    pass


def decode_value(value: dict[str, Any]) -> Any:
    """Firestore REST typed value -> plain Python value."""
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "nullValue" in value:
        return None
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    return None


def decode_fields(fields: dict[str, dict[str, Any]]) -> dict[str, Any]:
    return {k: decode_value(v) for k, v in fields.items()}


class FirestoreClient:
    """
    Read-only access to one Firestore collection through the REST API.

    One request per load, no retries: a failure surfaces as FirestoreError and
    the caller decides whether to try again.
    """

    def __init__(
        self,
        project_id: str,
        api_key: str | None = None,
        database: str = "(default)",
        base_url: str = "https://firestore.googleapis.com/v1",
        timeout: float = 20.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._project_id = project_id
        self._api_key = api_key
        self._database = database
        self._base_url = base_url.rstrip("/")

        self._client = httpx.Client(
            base_url=self._base_url,
            headers={"User-Agent": "finance-tracker/0.1.0"},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "FirestoreClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @property
    def _documents_path(self) -> str:
        return f"/projects/{self._project_id}/databases/{self._database}/documents"

    def _post_json(self, path: str, body: dict[str, Any]) -> object:
        params = {"key": self._api_key} if self._api_key else None
        try:
            resp = self._client.post(path, json=body, params=params)
        except httpx.RequestError as e:
            raise FirestoreError(f"Firestore request failed: {path}. Error: {e}") from e

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FirestoreError(
                f"Firestore API error: {resp.status_code} {resp.reason_phrase}. Response: {resp.text}"
            ) from e

        try:
            return resp.json()
        except ValueError as e:
            raise FirestoreError(f"Firestore returned invalid JSON for {path}") from e

    def list_transactions(self, collection: str) -> list[RawTransaction]:
        """All documents of ``collection``, newest ``date`` first."""
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "orderBy": [{"field": {"fieldPath": "date"}, "direction": "DESCENDING"}],
            }
        }
        payload = self._post_json(f"{self._documents_path}:runQuery", body)
        if not isinstance(payload, list):
            raise FirestoreError("Firestore runQuery response is not a list")

        out: list[RawTransaction] = []
        for x in payload:
            try:
                item = RunQueryItem.model_validate(x)
            except ValidationError as e:
                raise FirestoreError(f"Unexpected runQuery item: {e}") from e
            if item.document is None:
                continue
            data = decode_fields(item.document.fields)
            data["id"] = item.document.doc_id
            try:
                out.append(RawTransaction.model_validate(data))
            except ValidationError as e:
                raise FirestoreError(f"Malformed document {item.document.doc_id}: {e}") from e

        logger.info("Loaded %d documents from collection=%s", len(out), collection)
        return out
