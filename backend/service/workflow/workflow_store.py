"""
Workflow Store — keyed persistence for workflow documents.

``WorkflowRepository`` holds the upsert/CRUD rules and works on the
persisted dict form produced by ``workflow_codec``. Subclasses only
read and write the ordered list of records:

* ``JsonWorkflowRepository`` — one JSON array document on disk,
  written atomically (temp file + rename).
* ``InMemoryWorkflowRepository`` — a list in memory, for tests.

Every read or write failure surfaces as ``WorkflowPersistenceError``.
A failed save never leaves a partially written store behind.
"""

from __future__ import annotations

import copy
import json
import os
import tempfile
import uuid
from abc import ABC, abstractmethod
from logging import getLogger
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from service.config import StorageConfig
from service.workflow.errors import WorkflowPersistenceError
from service.workflow.nodes.base import NodeCatalog, get_node_catalog
from service.workflow.workflow_codec import (
    FALLBACK_PRESENTATION_KEY,
    deserialize_workflow,
    serialize_workflow,
)
from service.workflow.workflow_model import Workflow, utc_now_iso

logger = getLogger(__name__)

Record = Dict[str, Any]


class WorkflowRepository(ABC):
    """Upsert and CRUD over persisted workflow records."""

    def __init__(
        self,
        catalog: Optional[NodeCatalog] = None,
        clock: Optional[Callable[[], str]] = None,
        fallback_key: str = FALLBACK_PRESENTATION_KEY,
    ) -> None:
        self._catalog = catalog if catalog is not None else get_node_catalog()
        self._clock = clock or utc_now_iso
        self._fallback_key = fallback_key

    # ── Storage primitives ──

    @abstractmethod
    def _read_records(self) -> List[Record]:
        """Return all records in insertion order."""

    @abstractmethod
    def _write_records(self, records: List[Record]) -> None:
        """Replace all records."""

    # ── CRUD ──

    def save(self, workflow: Workflow) -> Workflow:
        """Create or update a workflow and return the stored copy.

        A Draft (``id is None``) gets a new id. An existing id keeps its
        original ``created_at``; ``updated_at`` is always set to now. The
        passed-in workflow is not modified. The record is loaded back
        before anything is written, so a record that could not be read
        again is never stored.
        """
        records = self._read_records()
        now = self._clock()
        record = serialize_workflow(workflow)
        if record["id"] is None:
            record["id"] = str(uuid.uuid4())

        index = _index_of(records, record["id"])
        if index is None:
            record["createdAt"] = now
            record["updatedAt"] = now
            records.append(record)
        else:
            record["createdAt"] = records[index].get("createdAt") or now
            record["updatedAt"] = now
            records[index] = record

        stored = self._to_workflow(record)
        self._write_records(records)
        logger.info(f"Workflow saved: {record['name']} ({record['id']})")
        return stored

    def get(self, workflow_id: str) -> Optional[Workflow]:
        """Load a single workflow by id, or ``None`` if absent."""
        records = self._read_records()
        index = _index_of(records, workflow_id)
        if index is None:
            return None
        return self._to_workflow(records[index])

    def list_all(self) -> List[Workflow]:
        """All workflows in insertion order. Malformed records are skipped."""
        workflows: List[Workflow] = []
        for record in self._read_records():
            try:
                workflows.append(self._to_workflow(record))
            except WorkflowPersistenceError as e:
                logger.warning(f"Skipping malformed workflow record: {e}")
        return workflows

    def delete(self, workflow_id: str) -> bool:
        records = self._read_records()
        kept = [r for r in records if r.get("id") != workflow_id]
        if len(kept) == len(records):
            return False
        self._write_records(kept)
        logger.info(f"Workflow deleted: {workflow_id}")
        return True

    def exists(self, workflow_id: str) -> bool:
        return _index_of(self._read_records(), workflow_id) is not None

    # ── Internals ──

    def _to_workflow(self, record: Record) -> Workflow:
        try:
            return deserialize_workflow(record, self._catalog, self._fallback_key)
        except (ValidationError, TypeError, AttributeError) as e:
            raise WorkflowPersistenceError(
                f"Malformed workflow record {record.get('id')}: {e}",
                workflow_id=record.get("id"),
            ) from e


def _index_of(records: List[Record], workflow_id: str) -> Optional[int]:
    for i, record in enumerate(records):
        if record.get("id") == workflow_id:
            return i
    return None


class InMemoryWorkflowRepository(WorkflowRepository):
    """Repository backed by a plain list; records are copied on every access."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._records: List[Record] = []

    def _read_records(self) -> List[Record]:
        return copy.deepcopy(self._records)

    def _write_records(self, records: List[Record]) -> None:
        self._records = copy.deepcopy(records)


class JsonWorkflowRepository(WorkflowRepository):
    """Persist all workflows as one JSON array in ``path``."""

    def __init__(self, path: Path, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._path = Path(path)
        logger.info(f"WorkflowStore initialized at {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    def _read_records(self) -> List[Record]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read workflow store {self._path}: {e}")
            raise WorkflowPersistenceError(f"Failed to read workflow store: {e}") from e
        if not isinstance(data, list):
            raise WorkflowPersistenceError(
                f"Workflow store {self._path} does not contain a list"
            )
        if not all(isinstance(record, dict) for record in data):
            raise WorkflowPersistenceError(
                f"Workflow store {self._path} contains a non-object record"
            )
        return data

    def _write_records(self, records: List[Record]) -> None:
        tmp_name = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=".workflows-", suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2)
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to write workflow store {self._path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise WorkflowPersistenceError(f"Failed to write workflow store: {e}") from e


# ── Singleton ──

_repository_instance: Optional[WorkflowRepository] = None


def get_workflow_repository() -> WorkflowRepository:
    """Return the global JSON-backed repository built from ``StorageConfig``.

    Also applies the configured log level to the ``service`` loggers.
    """
    global _repository_instance
    if _repository_instance is None:
        config = StorageConfig.get_default_instance()
        config.apply_log_level()
        _repository_instance = JsonWorkflowRepository(
            config.storage_file,
            fallback_key=config.fallback_presentation_key,
        )
    return _repository_instance
