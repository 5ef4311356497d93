# tests/conftest.py
from __future__ import annotations

import itertools
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from loguru import logger

from kfold_cv.core.types import Resource, ResourceStatus
from kfold_cv.utils.errors import ResourceFailed


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


# =============================================================================
# In-memory platform
# =============================================================================
class FakePlatformAdapter:
    """
    In-memory stand-in for ResourceAdapter.

    Contract:
    - create() returns a pending handle; the resource is terminal on first fetch
    - derived datasets really partition rows (row_offset / row_step / new_fields)
    - fail(kind, n) makes the n-th (0-based) creation of `kind` end FAULTY
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self.resources: Dict[str, Dict[str, Any]] = {}
        self.created: List[Tuple[str, Dict[str, Any]]] = []
        self.deleted: List[str] = []
        self.fetched: List[str] = []
        self._failures: Dict[Tuple[str, int], str] = {}

    # ---------------- setup helpers ----------------
    def _new_id(self, kind: str) -> str:
        return f"{kind}/{next(self._ids):024x}"

    def add_dataset(
            self,
            name: str,
            rows: List[Dict[str, Any]],
            fields: Dict[str, Dict[str, Any]],
            objective_field: Optional[str] = None,
    ) -> str:
        rid = self._new_id("dataset")
        self.resources[rid] = {
            "resource": rid,
            "name": name,
            "status": {"code": ResourceStatus.FINISHED, "message": "finished"},
            "fields": fields,
            "rows": len(rows),
            "objective_field": {"id": objective_field} if objective_field else None,
            "data": rows,
        }
        return rid

    def add_resource(self, kind: str) -> str:
        rid = self._new_id(kind)
        self.resources[rid] = {
            "resource": rid,
            "status": {"code": ResourceStatus.FINISHED, "message": "finished"},
        }
        return rid

    def fail(self, kind: str, n: int, cause: str = "boom") -> None:
        self._failures[(kind, n)] = cause

    def created_of(self, kind: str) -> List[Dict[str, Any]]:
        return [body for k, body in self.created if k == kind]

    # ---------------- adapter API ----------------
    def create(self, kind: str, args: Dict[str, Any]) -> Resource:
        n = len(self.created_of(kind))
        self.created.append((kind, dict(args)))

        rid = self._new_id(kind)
        payload: Dict[str, Any] = {"resource": rid, "name": args.get("name", ""), "request": dict(args)}

        if kind == "dataset" and "origin_dataset" in args:
            payload.update(self._derive(args))

        cause = self._failures.get((kind, n))
        if cause is not None:
            payload["status"] = {"code": ResourceStatus.FAULTY, "message": cause}
        else:
            payload["status"] = {"code": ResourceStatus.FINISHED, "message": "finished"}

        self.resources[rid] = payload
        return Resource.from_json({"resource": rid, "status": {"code": ResourceStatus.QUEUED}})

    def _derive(self, args: Dict[str, Any]) -> Dict[str, Any]:
        origin = self.resources[args["origin_dataset"]]
        offset, step = args["row_offset"], args["row_step"]

        fields = dict(origin["fields"])
        rows = [dict(r) for r in origin["data"][offset::step]]
        for extra in args.get("new_fields", []):
            fid = f"{len(fields):06x}"
            fields[fid] = {
                "name": extra["name"],
                "optype": "categorical",
                "preferred": True,
                "column_number": len(fields),
            }
            for r in rows:
                r[extra["name"]] = extra["field"]

        return {"name": origin["name"], "fields": fields, "rows": len(rows), "data": rows}

    def fetch(self, resource_id: str) -> Resource:
        self.fetched.append(resource_id)
        return Resource.from_json(self.resources[resource_id])

    def wait(self, resource_id: str, timeout=None) -> Resource:
        return self.wait_all([resource_id], timeout=timeout)[0]

    def wait_all(self, resource_ids: Sequence[str], timeout=None) -> List[Resource]:
        results = []
        for rid in resource_ids:
            resource = self.fetch(rid)
            if resource.status.is_failed:
                raise ResourceFailed(rid, resource.status_message)
            results.append(resource)
        return results

    def create_and_wait(self, kind: str, args: Dict[str, Any], timeout=None) -> Resource:
        return self.wait(self.create(kind, args).id, timeout=timeout)

    def delete(self, resource_id: str) -> None:
        self.deleted.append(resource_id)
        self.resources.pop(resource_id, None)

    def delete_all(self, resource_ids: Sequence[str]) -> List[str]:
        for rid in resource_ids:
            self.delete(rid)
        return []


# =============================================================================
# Fixtures
# =============================================================================
FIELDS = {
    "000000": {"name": "x", "optype": "numeric", "preferred": True, "column_number": 0},
    "000001": {"name": "notes", "optype": "text", "preferred": False, "column_number": 1},
    "000002": {"name": "f", "optype": "categorical", "preferred": True, "column_number": 2},
}


@pytest.fixture
def platform() -> FakePlatformAdapter:
    return FakePlatformAdapter()


@pytest.fixture
def dataset_id(platform: FakePlatformAdapter) -> str:
    """
    dataset "D": 10 rows, preferred categorical objective "f" (000002)
    """
    rows = [
        {"row": i, "x": float(i), "notes": f"n{i}", "f": "a" if i % 2 else "b"}
        for i in range(10)
    ]
    return platform.add_dataset("D", rows, FIELDS, objective_field="000002")
