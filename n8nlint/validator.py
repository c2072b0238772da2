# n8nlint/validator.py
"""
Validation entry points.

    validate_workflow(data)        already-parsed document
    validate_workflow_json(text)   JSON text (str or bytes)
    validate_workflow_file(path)   path to a JSON file

None of them raise for bad input: parse and read failures become a single
error Issue, everything else goes through the three-stage pipeline.
"""

from __future__ import annotations

import json
from typing import Any, List, Union

from n8nlint.consistency.connections import check_connection_warnings, validate_connections
from n8nlint.consistency.nodes import check_node_warnings, validate_nodes
from n8nlint.structural.checker import structural_check
from n8nlint.types import Issue, ValidationResult, error
from n8nlint.utils.io import PathLike, read_text
from n8nlint.utils.logger import get_logger

logger = get_logger("validator")


def validate_workflow(data: Any) -> ValidationResult:
    """
    Run structure -> nodes -> connections.

    A schema failure returns immediately; the node and connection checks
    assume a conforming document. Warnings never affect `valid`.
    """
    report = structural_check(data)
    if not report.valid:
        return ValidationResult.from_issues(report.errors, report.warnings)

    workflow = report.workflow
    errors: List[Issue] = list(report.errors)
    warnings: List[Issue] = list(report.warnings)

    errors.extend(validate_nodes(workflow.nodes))
    warnings.extend(check_node_warnings(workflow.nodes))

    errors.extend(validate_connections(workflow.connections, workflow.nodes))
    warnings.extend(check_connection_warnings(workflow.connections, workflow.nodes))

    logger.debug(
        "validated %d node(s): %d error(s), %d warning(s)",
        len(workflow.nodes), len(errors), len(warnings),
    )
    return ValidationResult.from_issues(errors, warnings)


def _reject_constant(name: str) -> Any:
    # Python's json accepts NaN/Infinity, JSON proper does not
    raise ValueError(f"Unexpected token {name}")


def validate_workflow_json(text: Union[str, bytes, bytearray]) -> ValidationResult:
    try:
        if isinstance(text, (bytes, bytearray)):
            text = text.decode("utf-8")
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:  # decode errors, or nesting past the recursion limit
        return ValidationResult.from_issues([error("root", f"Invalid JSON: {e}")], [])

    return validate_workflow(data)


def validate_workflow_file(path: PathLike) -> ValidationResult:
    try:
        content = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        reason = getattr(e, "strerror", None) or str(e)
        logger.debug("cannot read %s: %s", path, reason)
        return ValidationResult.from_issues(
            [error("file", f'Cannot read file "{path}": {reason}')], []
        )

    return validate_workflow_json(content)
