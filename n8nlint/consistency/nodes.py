# n8nlint/consistency/nodes.py
from typing import List, Set

from n8nlint.types import Issue, Node, error, warning

POSITION_LIMIT = 100000
MIN_TYPE_VERSION = 1


def _node_path(i: int, node: Node) -> str:
    # index + name, so duplicates stay distinguishable
    return f"nodes[{i}].{node.name}"


def _fmt_number(v) -> str:
    """Render 2.0 as 2, like the JSON it came from."""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


def validate_nodes(nodes: List[Node]) -> List[Issue]:
    """
    Identity and range errors, scanned in declaration order.
    Only the second and later occurrences of an id/name are flagged.
    """
    errors: List[Issue] = []
    seen_ids: Set[str] = set()
    seen_names: Set[str] = set()

    for i, node in enumerate(nodes):
        path = _node_path(i, node)

        if node.id in seen_ids:
            errors.append(error(f"{path}.id", f'Duplicate node ID: "{node.id}"'))
        seen_ids.add(node.id)

        if node.name in seen_names:
            errors.append(error(f"{path}.name", f'Duplicate node name: "{node.name}"'))
        seen_names.add(node.name)

        x, y = node.position
        # written as "inside is fine" so NaN lands outside
        if not (abs(x) <= POSITION_LIMIT and abs(y) <= POSITION_LIMIT):
            errors.append(error(
                f"{path}.position",
                f"Node position [{_fmt_number(x)}, {_fmt_number(y)}] is outside reasonable bounds",
            ))

        if not (node.type_version >= MIN_TYPE_VERSION):
            errors.append(error(
                f"{path}.typeVersion",
                f"Invalid type version: {_fmt_number(node.type_version)} (must be >= {MIN_TYPE_VERSION})",
            ))

    return errors


def check_node_warnings(nodes: List[Node]) -> List[Issue]:
    """Advisories only; never consulted for validity."""
    warnings: List[Issue] = []

    for i, node in enumerate(nodes):
        path = _node_path(i, node)

        if node.disabled:
            warnings.append(warning(path, f'Node "{node.name}" is disabled'))

        if not node.parameters:
            warnings.append(warning(
                f"{path}.parameters",
                f'Node "{node.name}" has no parameters configured',
            ))

    return warnings
