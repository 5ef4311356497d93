# kfold_cv/core/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping, Optional, Tuple

SELECTABLE_OPTYPES = frozenset({"categorical", "numeric"})


class PredictorKind(str, Enum):
    MODEL = "model"
    ENSEMBLE = "ensemble"


class ResourceStatus(IntEnum):
    """Platform status codes (resource["status"]["code"])."""

    WAITING = 0
    QUEUED = 1
    STARTED = 2
    IN_PROGRESS = 3
    SUMMARIZED = 4
    FINISHED = 5
    FAULTY = -1
    UNKNOWN = -2

    @property
    def is_terminal(self) -> bool:
        return self in (ResourceStatus.FINISHED, ResourceStatus.FAULTY, ResourceStatus.UNKNOWN)

    @property
    def is_failed(self) -> bool:
        return self in (ResourceStatus.FAULTY, ResourceStatus.UNKNOWN)


@dataclass(frozen=True)
class ResourceRef:
    """'dataset/5af06df94e17277501000010' → kind='dataset', key='5af0...'"""

    kind: str
    key: str

    @property
    def id(self) -> str:
        return f"{self.kind}/{self.key}"

    @classmethod
    def parse(cls, value: str) -> "ResourceRef":
        kind, sep, key = value.partition("/")
        if not sep or not kind or not key or "/" in key:
            raise ValueError(f"not a resource id: {value!r}")
        return cls(kind=kind, key=key)

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class Resource:
    """
    Parsed remote representation (FROZEN)

    - raw keeps the platform JSON untouched
    - status is coerced to ResourceStatus; unknown codes map to UNKNOWN
    """

    ref: ResourceRef
    status: ResourceStatus
    status_message: str = ""
    name: str = ""
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def id(self) -> str:
        return self.ref.id

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> "Resource":
        status = payload.get("status") or {}
        try:
            code = ResourceStatus(int(status.get("code", ResourceStatus.WAITING)))
        except ValueError:
            code = ResourceStatus.UNKNOWN
        return cls(
            ref=ResourceRef.parse(payload["resource"]),
            status=code,
            status_message=str(status.get("message", "")),
            name=str(payload.get("name", "")),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class Field:
    id: str
    name: str
    optype: str
    preferred: bool = True

    @property
    def selectable(self) -> bool:
        return self.preferred and self.optype in SELECTABLE_OPTYPES


@dataclass(frozen=True)
class DatasetRef:
    id: str
    name: str
    fields: Mapping[str, Field] = field(default_factory=dict, compare=False)
    rows: Optional[int] = None
    objective_field: Optional[str] = None

    @classmethod
    def from_resource(cls, resource: Resource) -> "DatasetRef":
        raw = resource.raw
        fields: Dict[str, Field] = {}
        # keep the platform's column order; the default objective relies on it
        ordered = sorted(
            (raw.get("fields") or {}).items(),
            key=lambda kv: kv[1].get("column_number", 0),
        )
        for fid, info in ordered:
            fields[fid] = Field(
                id=fid,
                name=str(info.get("name", fid)),
                optype=str(info.get("optype", "")),
                preferred=bool(info.get("preferred", True)),
            )

        objective = raw.get("objective_field") or {}
        return cls(
            id=resource.id,
            name=resource.name or str(raw.get("name", "")),
            fields=fields,
            rows=raw.get("rows"),
            objective_field=objective.get("id") if isinstance(objective, Mapping) else objective,
        )

    def selectable_fields(self) -> List[Field]:
        return [f for f in self.fields.values() if f.selectable]


@dataclass(frozen=True)
class Fold:
    index: int
    dataset: DatasetRef


@dataclass(frozen=True)
class FoldPair:
    held_out: Fold
    complement: Tuple[DatasetRef, ...]

    @property
    def index(self) -> int:
        return self.held_out.index

    def complement_ids(self) -> List[str]:
        return [ds.id for ds in self.complement]
