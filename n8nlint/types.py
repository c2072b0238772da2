# n8nlint/types.py
"""
Typed view of an n8n workflow document and of validation results.

The dataclasses here are only ever built from documents that already passed
the JSON schema in `n8nlint.structural.schema`, so `from_dict` constructors
index required keys directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]
Number = Union[int, float]
IssueKind = Literal["error", "warning"]


@dataclass(frozen=True)
class Connection:
    """One edge endpoint: target node name, connection type and input slot."""
    node: str
    type: str
    index: Number

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Connection":
        return cls(node=data["node"], type=data["type"], index=data["index"])


# connection-type label -> output slots; None marks an unconnected output
NodeConnections = Dict[str, List[Optional[List[Connection]]]]
# source node name -> its outputs
Connections = Dict[str, NodeConnections]


def connections_from_dict(data: Dict[str, Any]) -> Connections:
    out: Connections = {}
    for source, outputs in data.items():
        out[source] = {
            conn_type: [
                None if slot is None else [Connection.from_dict(c) for c in slot]
                for slot in slots
            ]
            for conn_type, slots in outputs.items()
        }
    return out


@dataclass(frozen=True)
class NodeCredential:
    id: Optional[str]
    name: str


@dataclass(frozen=True)
class Node:
    """A workflow vertex. `parameters` is kept as the raw JSON tree."""
    id: str
    name: str
    type: str
    type_version: Number
    position: Tuple[Number, Number]
    parameters: Dict[str, JsonValue] = field(default_factory=dict)
    disabled: Optional[bool] = None
    notes: Optional[str] = None
    notes_in_flow: Optional[bool] = None
    retry_on_fail: Optional[bool] = None
    max_tries: Optional[Number] = None
    wait_between_tries: Optional[Number] = None
    always_output_data: Optional[bool] = None
    execute_once: Optional[bool] = None
    on_error: Optional[str] = None
    continue_on_fail: Optional[bool] = None
    webhook_id: Optional[str] = None
    credentials: Optional[Dict[str, NodeCredential]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Node":
        creds = data.get("credentials")
        x, y = data["position"]
        return cls(
            id=data["id"],
            name=data["name"],
            type=data["type"],
            type_version=data["typeVersion"],
            position=(x, y),
            parameters=data["parameters"],
            disabled=data.get("disabled"),
            notes=data.get("notes"),
            notes_in_flow=data.get("notesInFlow"),
            retry_on_fail=data.get("retryOnFail"),
            max_tries=data.get("maxTries"),
            wait_between_tries=data.get("waitBetweenTries"),
            always_output_data=data.get("alwaysOutputData"),
            execute_once=data.get("executeOnce"),
            on_error=data.get("onError"),
            continue_on_fail=data.get("continueOnFail"),
            webhook_id=data.get("webhookId"),
            credentials=None if creds is None else {
                key: NodeCredential(id=c.get("id"), name=c["name"])
                for key, c in creds.items()
            },
        )


@dataclass(frozen=True)
class Workflow:
    """Root aggregate. Metadata fields are carried, never interpreted."""
    nodes: List[Node]
    connections: Connections
    id: Any = None
    name: Any = None
    active: Any = None
    settings: Any = None
    static_data: Any = None
    pin_data: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workflow":
        return cls(
            nodes=[Node.from_dict(n) for n in data["nodes"]],
            connections=connections_from_dict(data["connections"]),
            id=data.get("id"),
            name=data.get("name"),
            active=data.get("active"),
            settings=data.get("settings"),
            static_data=data.get("staticData"),
            pin_data=data.get("pinData"),
        )


@dataclass(frozen=True)
class Issue:
    path: str
    message: str
    kind: IssueKind = "error"

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message, "kind": self.kind}


def error(path: str, message: str) -> Issue:
    return Issue(path=path, message=message, kind="error")


def warning(path: str, message: str) -> Issue:
    return Issue(path=path, message=message, kind="warning")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)

    @classmethod
    def from_issues(cls, errors: List[Issue], warnings: List[Issue]) -> "ValidationResult":
        return cls(valid=not errors, errors=list(errors), warnings=list(warnings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }
