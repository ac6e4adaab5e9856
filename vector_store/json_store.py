"""
Flat-file record store: one JSON array per table under a database directory.

Every read loads the whole table and every write rewrites it, so the store is
only meant for small datasets and a single writer.
"""
import contextlib
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional

from utils.errors import InvalidTableName, StoreError

logger = logging.getLogger(__name__)


class JsonRecordStore:
    def __init__(self, db_dir: str = "dataBase") -> None:
        """
        Args:
            db_dir: Database directory, resolved against the working directory.
                Created if missing.
        """
        self.db_path = Path(db_dir).resolve()
        try:
            self.db_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Failed to initialize database directory: {e}") from e

    def _table_path(self, table: str) -> Path:
        if (
            not table
            or not isinstance(table, str)
            or "/" in table
            or "\\" in table
            or ".." in table
        ):
            raise InvalidTableName(
                f'Invalid table name provided: "{table}". Must be a valid filename component.'
            )
        return self.db_path / f"{table}.json"

    def _read_table(self, table: str) -> List[Any]:
        path = self._table_path(table)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as e:
            logger.error("Error decoding table %r at %s: %s", table, path, e)
            return []
        except OSError as e:
            logger.error("Error reading table %r at %s: %s", table, path, e)
            return []

        if content.strip() == "":
            return []
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("Error parsing table %r at %s: %s", table, path, e)
            return []
        if not isinstance(data, list):
            logger.warning("Data in table %r is not an array. Returning empty array.", table)
            return []
        return data

    def _write_table(self, table: str, data: List[Any]) -> None:
        # temp file + replace keeps the table whole if the write dies midway
        path = self._table_path(table)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            logger.error("Error writing table %r at %s: %s", table, path, e)
            raise StoreError(f"Failed to write table {table!r}: {e}") from e

    def insert(self, table: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Append one record to `table` and return it with its generated `id`.

        Raises:
            StoreError: if `data` is not a dict or already has an `id`.
        """
        if not isinstance(data, dict):
            raise StoreError("Data to insert must be an object.")
        if "id" in data:
            raise StoreError("Input data should not contain an 'id' property; it will be generated.")

        rows = self._read_table(table)
        record = {**data, "id": str(uuid.uuid4())}
        rows.append(record)
        self._write_table(table, rows)
        return record

    def insert_many(self, table: str, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Append several records in one write. Invalid items are skipped with a
        warning; the table is untouched when nothing valid remains.
        """
        if not isinstance(items, list):
            raise StoreError("Input data must be an array of objects.")

        rows = self._read_table(table)
        new_records = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning("Skipping invalid item in batch insert: %r", item)
                continue
            if "id" in item:
                logger.warning("Skipping item with existing 'id' property in batch insert: %s", item["id"])
                continue
            record = {**item, "id": str(uuid.uuid4())}
            rows.append(record)
            new_records.append(record)

        if new_records:
            self._write_table(table, rows)
        return new_records

    def get_by_id(self, table: str, record_id: str) -> Optional[Dict[str, Any]]:
        if not record_id or not isinstance(record_id, str):
            return None
        for row in self._read_table(table):
            if isinstance(row, dict) and row.get("id") == record_id:
                return row
        return None

    def get_all(self, table: str) -> List[Dict[str, Any]]:
        return [
            row for row in self._read_table(table)
            if isinstance(row, dict) and isinstance(row.get("id"), str)
        ]

    def delete_table(self, table: str) -> bool:
        """Remove the table file. Returns False if it did not exist."""
        path = self._table_path(table)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StoreError(f"Failed to delete table {table!r}: {e}") from e
        return True
