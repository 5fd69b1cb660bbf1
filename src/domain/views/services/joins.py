# File: domain/views/services/joins.py
"""
Explicit cross-collection join contracts used by the view builders.

Every join is declared up front with its cardinality and its handling of
references that no longer resolve, then executed as one batched ``$in``
lookup for the whole page of rows.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from common.logging.logger import log_debug
from infrastructure.database.mongodb.repositories.entity_store import EntityStore

USER_SUMMARY_FIELDS = {"username": 1, "full_name": 1, "avatar": 1}


class Cardinality(str, Enum):
    ONE = "one"    # local field holds a single id
    MANY = "many"  # local field holds an ordered list of ids


class JoinMode(str, Enum):
    LEFT = "left"    # keep the row, joined value is None
    INNER = "inner"  # drop what cannot be resolved


@dataclass(frozen=True)
class JoinSpec:
    local_field: str
    collection: str
    as_field: str
    projection: Optional[Dict[str, int]] = None
    cardinality: Cardinality = Cardinality.ONE
    mode: JoinMode = JoinMode.LEFT


def owner_join(local_field: str = "owner", as_field: Optional[str] = None) -> JoinSpec:
    return JoinSpec(
        local_field=local_field,
        collection="users",
        as_field=as_field or local_field,
        projection=USER_SUMMARY_FIELDS,
    )


def _referenced_ids(rows: List[Dict[str, Any]], spec: JoinSpec) -> List[str]:
    if spec.cardinality is Cardinality.ONE:
        return [row.get(spec.local_field) for row in rows]
    return [ref for row in rows for ref in (row.get(spec.local_field) or [])]


async def apply_join(store: EntityStore, rows: List[Dict[str, Any]], spec: JoinSpec) -> List[Dict[str, Any]]:
    """
    Attach the documents referenced by ``spec.local_field`` to each row.

    For ONE joins an unresolved reference yields ``None`` (LEFT) or removes
    the row (INNER). For MANY joins the order of the id list is kept and
    unresolved members are ``None`` (LEFT) or left out (INNER).
    """
    if not rows:
        return []

    targets = await store.repository(spec.collection).find_by_ids(_referenced_ids(rows, spec), spec.projection)

    joined = []
    dropped = 0
    for row in rows:
        if spec.cardinality is Cardinality.ONE:
            target = targets.get(row.get(spec.local_field))
            if target is None and spec.mode is JoinMode.INNER:
                dropped += 1
                continue
            joined.append({**row, spec.as_field: target})
        else:
            members = [targets.get(ref) for ref in (row.get(spec.local_field) or [])]
            if spec.mode is JoinMode.INNER:
                members = [member for member in members if member is not None]
            joined.append({**row, spec.as_field: members})

    if dropped:
        log_debug("Join dropped unresolved rows", extra={"collection": spec.collection, "field": spec.local_field, "dropped": dropped})
    return joined


async def apply_nested_join(store: EntityStore, rows: List[Dict[str, Any]], parent_field: str, spec: JoinSpec) -> List[Dict[str, Any]]:
    """
    Run ``spec`` against documents already joined under ``parent_field``.

    The parent value may be a single document or a list of documents (the
    result of a MANY join); missing parents are left untouched.
    """
    children = []
    for row in rows:
        value = row.get(parent_field)
        if isinstance(value, list):
            children.extend(child for child in value if child is not None)
        elif value is not None:
            children.append(value)

    # LEFT only: the parent has already been resolved
    resolved = await apply_join(store, children, JoinSpec(
        local_field=spec.local_field,
        collection=spec.collection,
        as_field=spec.as_field,
        projection=spec.projection,
        cardinality=spec.cardinality,
        mode=JoinMode.LEFT,
    ))
    by_position = iter(resolved)

    result = []
    for row in rows:
        value = row.get(parent_field)
        if isinstance(value, list):
            row = {**row, parent_field: [next(by_position) if child is not None else None for child in value]}
        elif value is not None:
            row = {**row, parent_field: next(by_position)}
        result.append(row)
    return result
