from pathlib import Path
import json
import os
import tempfile
import uuid
from typing import Any, Dict

from ..errors import NotFoundError, StoreError


class JsonStore:
    """
    Key-value store kept in a single pretty-printed JSON document.

    The whole file is read on every call and rewritten on every change:
      - layout: {"<id>": {...record...}, ...}
      - ids:    random UUID4 strings, assigned on insert
      - writes: temp file in the same directory, then os.replace()
    A missing file reads as an empty store; it is created on first write.
    There is no locking between processes.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    # ---------- READ ----------
    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StoreError(f"Data file {self.path} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise StoreError(f"Cannot read data file {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StoreError(f"Data file {self.path} must contain a JSON object")
        return data

    def get_all(self) -> Dict[str, Any]:
        data = self._load()
        return {k: data[k] for k in sorted(data)}

    def get(self, record_id: str) -> Any:
        data = self._load()
        if record_id not in data:
            raise NotFoundError(record_id)
        return data[record_id]

    def count(self) -> int:
        return len(self._load())

    # ---------- WRITE ----------
    def _dump(self, data: Dict[str, Any]) -> None:
        try:
            text = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Cannot serialize record: {exc}") from exc

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=str(self.path.parent), prefix=f".{self.path.name}.", delete=False
            ) as f:
                tmp_name = f.name
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"Cannot write data file {self.path}: {exc}") from exc

    def insert(self, record: Any) -> str:
        data = self._load()
        record_id = str(uuid.uuid4())
        while record_id in data:
            record_id = str(uuid.uuid4())
        data[record_id] = record
        self._dump(data)
        return record_id

    def delete(self, record_id: str) -> None:
        data = self._load()
        if record_id not in data:
            raise NotFoundError(record_id)
        del data[record_id]
        self._dump(data)
