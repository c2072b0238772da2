# n8nlint/consistency/connections.py

from typing import List

from n8nlint.types import Connections, Issue, Node, error, warning
from n8nlint.utils.graph import build_connection_graph, connected_names

# Entry points are expected to have no incoming edges.
TRIGGER_PATTERNS = ("trigger", "webhook", "schedule", "cron", "start")

# Annotation nodes that live on the canvas without edges (whole-type match).
STANDALONE_NODE_TYPES = ("n8n-nodes-base.stickynote",)


def validate_connections(connections: Connections, nodes: List[Node]) -> List[Issue]:
    """
    Referential integrity of the connection graph.

    An unknown source yields exactly one error and its entries are not
    inspected further. A single entry may fail both the target and the
    index check.
    """
    errors: List[Issue] = []
    node_names = {n.name for n in nodes}

    for source, outputs in connections.items():
        if source not in node_names:
            errors.append(error(
                f"connections.{source}",
                f'Connection source node "{source}" does not exist in nodes',
            ))
            continue

        for conn_type, slots in outputs.items():
            for output_idx, slot in enumerate(slots):
                if slot is None:
                    continue
                for conn_idx, conn in enumerate(slot):
                    conn_path = f"connections.{source}.{conn_type}[{output_idx}][{conn_idx}]"

                    if conn.node not in node_names:
                        errors.append(error(
                            conn_path,
                            f'Connection target node "{conn.node}" does not exist in nodes',
                        ))

                    if not (conn.index >= 0):
                        errors.append(error(
                            f"{conn_path}.index",
                            f"Invalid connection index: {conn.index} (must be >= 0)",
                        ))

    return errors


def _is_likely_trigger(node: Node) -> bool:
    t = node.type.lower()
    return any(p in t for p in TRIGGER_PATTERNS)


def _is_standalone(node: Node) -> bool:
    return node.type.lower() in STANDALONE_NODE_TYPES


def check_connection_warnings(connections: Connections, nodes: List[Node]) -> List[Issue]:
    """Warn about declared nodes that appear nowhere in the graph."""
    warnings: List[Issue] = []
    connected = connected_names(build_connection_graph(connections))

    for node in nodes:
        if node.name in connected:
            continue
        if _is_likely_trigger(node) or _is_standalone(node):
            continue
        warnings.append(warning(
            f"nodes.{node.name}",
            f'Node "{node.name}" is not connected to any other node',
        ))

    return warnings
