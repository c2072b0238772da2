# utils/graph.py
from typing import Set

import networkx as nx

from n8nlint.types import Connections


def build_connection_graph(connections: Connections) -> nx.MultiDiGraph:
    """
    Build a multigraph keyed by node *name* from typed n8n connections:
      connections[<source>][<type>][<outputIndex>] -> [Connection, ...] | None

    Every source key becomes a graph node even if all its outputs are empty,
    and every target name becomes one even if it is not a declared node.
    Edge attributes keep the connection type, output slot and input index.
    """
    G = nx.MultiDiGraph()
    for source, outputs in connections.items():
        G.add_node(source)
        for conn_type, slots in outputs.items():
            for output_idx, slot in enumerate(slots):
                if slot is None:
                    continue
                for conn in slot:
                    G.add_edge(
                        source,
                        conn.node,
                        type=conn_type,
                        output=output_idx,
                        index=conn.index,
                    )
    return G


def connected_names(G: nx.MultiDiGraph) -> Set[str]:
    """Names that appear anywhere in the connection graph."""
    return set(G.nodes)
