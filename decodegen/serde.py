from __future__ import annotations

import json
from typing import Any, Dict

from .extract import BitRun, ExtractionPlan, OperandField
from .numbering import DecodeNode, DecodeTable

FORMAT_VERSION = 1


def _field_to_dict(operand: OperandField) -> Dict[str, Any]:
    return {
        "name": operand.name,
        "runs": [{"start": run.start, "width": run.width} for run in operand.runs],
        "steps": [{"mask": step.mask, "shift": step.shift} for step in operand.steps],
    }


def plan_to_dict(plan: ExtractionPlan) -> Dict[str, Any]:
    return {"variant": plan.variant, "fields": [_field_to_dict(f) for f in plan.fields]}


def plan_from_dict(data: Dict[str, Any]) -> ExtractionPlan:
    fields = tuple(
        OperandField(
            name=entry["name"],
            runs=tuple(BitRun(run["start"], run["width"]) for run in entry["runs"]),
        )
        for entry in data.get("fields", [])
    )
    return ExtractionPlan(variant=data["variant"], fields=fields)


def node_to_dict(node: DecodeNode) -> Dict[str, Any]:
    data: Dict[str, Any] = {"id": node.id, "mask": node.mask}
    if node.is_terminal:
        data["winner"] = node.winner
        data["candidates"] = list(node.candidates)
    else:
        data["entries"] = [
            {"value": value, "child": child} for value, child in node.entries
        ]
    return data


def node_from_dict(data: Dict[str, Any]) -> DecodeNode:
    return DecodeNode(
        id=data["id"],
        mask=data["mask"],
        entries=tuple(
            (entry["value"], entry["child"]) for entry in data.get("entries", [])
        ),
        winner=data.get("winner"),
        candidates=tuple(data.get("candidates", ())),
    )


def to_dict(table: DecodeTable) -> Dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "name": table.name,
        "nodes": [node_to_dict(node) for node in table.nodes],
        "variants": [
            {
                "name": name,
                "category": table.categories.get(name, ""),
                **plan_to_dict(plan),
            }
            for name, plan in table.plans.items()
        ],
    }


def from_dict(data: Dict[str, Any]) -> DecodeTable:
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported decode table version: {version!r}")
    plans: Dict[str, ExtractionPlan] = {}
    categories: Dict[str, str] = {}
    for entry in data.get("variants", []):
        plans[entry["name"]] = plan_from_dict(entry)
        categories[entry["name"]] = entry.get("category", "")
    return DecodeTable(
        nodes=tuple(node_from_dict(node) for node in data["nodes"]),
        plans=plans,
        categories=categories,
        name=data.get("name", "catalog"),
    )


def to_json(table: DecodeTable, indent: int | None = 2) -> str:
    return json.dumps(to_dict(table), indent=indent, sort_keys=True)


def from_json(payload: str) -> DecodeTable:
    return from_dict(json.loads(payload))


__all__ = [
    "FORMAT_VERSION",
    "from_dict",
    "from_json",
    "node_from_dict",
    "node_to_dict",
    "plan_from_dict",
    "plan_to_dict",
    "to_dict",
    "to_json",
]
