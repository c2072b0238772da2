# n8nlint/structural/checker.py

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from jsonschema import Draft202012Validator, ValidationError

from .schema import WORKFLOW_SCHEMA
from n8nlint.types import Issue, Workflow, error, warning
from n8nlint.utils.logger import get_logger

logger = get_logger("structural")

_VALIDATOR = Draft202012Validator(WORKFLOW_SCHEMA)


@dataclass(frozen=True)
class StructuralReport:
    workflow: Optional[Workflow]
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def structural_check(data: Any) -> StructuralReport:
    """
    Check `data` against WORKFLOW_SCHEMA.

    Every violation becomes one error Issue. When there is at least one, no
    typed workflow is produced and later stages must not run. A conforming
    document with an empty node list is still valid but gets a warning.
    """
    errors: List[Issue] = []
    seen_required: Set[Tuple[Any, ...]] = set()

    for err in _VALIDATOR.iter_errors(data):
        location = tuple(err.absolute_path)
        if err.validator == "required":
            # jsonschema yields one error per missing key; report them all at once
            if location in seen_required:
                continue
            seen_required.add(location)
            errors.extend(_missing_properties(err, location))
            continue
        errors.append(error(_format_path(location), _describe(err)))

    if errors:
        logger.debug("schema check failed with %d violation(s)", len(errors))
        return StructuralReport(workflow=None, errors=errors)

    workflow = Workflow.from_dict(data)
    warnings: List[Issue] = []
    if not workflow.nodes:
        warnings.append(warning("nodes", "Workflow has no nodes"))
    return StructuralReport(workflow=workflow, errors=[], warnings=warnings)


# ---------- Error rendering ----------

def _format_path(location: Tuple[Any, ...]) -> str:
    return ".".join(str(p) for p in location) or "root"


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expected(schema: Dict[str, Any]) -> str:
    if "type" in schema:
        t = schema["type"]
        return " or ".join(t) if isinstance(t, list) else str(t)
    if "enum" in schema:
        return "one of " + ", ".join(_literal(v) for v in schema["enum"])
    return "a value"


def _literal(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


def _missing_properties(err: ValidationError, location: Tuple[Any, ...]) -> List[Issue]:
    props = err.schema.get("properties", {})
    instance = err.instance if isinstance(err.instance, dict) else {}
    out: List[Issue] = []
    for name in err.validator_value:
        if name in instance:
            continue
        expected = _expected(props.get(name, {}))
        out.append(error(
            _format_path(location + (name,)),
            f'Required property "{name}" is missing (expected {expected})',
        ))
    return out


def _describe(err: ValidationError) -> str:
    """Expected-vs-received message for the keywords WORKFLOW_SCHEMA uses."""
    kind = err.validator
    instance = err.instance

    if kind == "type":
        return f"Expected {_expected(err.schema)}, received {_json_type(instance)}"

    if kind == "enum":
        return (
            f"Invalid option: expected {_expected(err.schema)}, "
            f"received {_literal(instance)}"
        )

    if kind in ("minItems", "maxItems") and isinstance(instance, list):
        lo = err.schema.get("minItems")
        hi = err.schema.get("maxItems")
        if lo is not None and lo == hi:
            return f"Expected exactly {lo} items, received {len(instance)}"
        if kind == "minItems":
            return f"Expected at least {lo} items, received {len(instance)}"
        return f"Expected at most {hi} items, received {len(instance)}"

    return err.message
