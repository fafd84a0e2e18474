"""File-based persistence for active route snapshots."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..config import settings
from ..errors import StoreUnavailableError
from ..models.domain import OptimizedRoute
from ..services.outputs.routing_formatter import route_from_json, route_to_json


class FileStorage:
    """Thin wrapper around the data root for storing JSON documents."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.snapshot_root = self.root / "active_routes"
        self.snapshot_root.mkdir(parents=True, exist_ok=True)

    def snapshot_path(self, key: str) -> Path:
        # Driver ids are arbitrary strings; hash them so distinct ids never share a file.
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.snapshot_root / f"{digest}.json"

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(path.suffix + ".tmp")
        with temp_path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)
        os.replace(temp_path, path)

    def read_json(self, path: Path) -> Any | None:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    def remove(self, path: Path) -> None:
        path.unlink(missing_ok=True)


class FileRouteStore:
    """One JSON snapshot per driver under <data_root>/active_routes/."""

    def __init__(self, storage: FileStorage | None = None) -> None:
        self.storage = storage or FileStorage()

    def load(self, driver_id: str) -> OptimizedRoute | None:
        path = self.storage.snapshot_path(driver_id)
        try:
            data = self.storage.read_json(path)
        except json.JSONDecodeError as exc:
            logging.warning(f"Discarding unreadable route snapshot {path}: {exc}")
            return None
        except OSError as exc:
            raise StoreUnavailableError("load_route", exc) from exc
        if not data:
            return None
        try:
            route = route_from_json(data)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logging.warning(f"Discarding malformed route snapshot {path}: {exc!r}")
            return None
        if route.driver_id != driver_id:
            logging.warning(f"Snapshot {path} belongs to driver {route.driver_id}, not {driver_id}; ignoring it")
            return None
        return route

    def save(self, route: OptimizedRoute) -> None:
        try:
            self.storage.write_json(self.storage.snapshot_path(route.driver_id), route_to_json(route))
        except OSError as exc:
            raise StoreUnavailableError("save_route", exc) from exc

    def delete(self, driver_id: str) -> None:
        try:
            self.storage.remove(self.storage.snapshot_path(driver_id))
        except OSError as exc:
            raise StoreUnavailableError("delete_route", exc) from exc
