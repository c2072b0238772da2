import copy

import pytest


def _node(name="Node", **overrides):
    node = {
        "id": f"id-{name}",
        "name": name,
        "type": "n8n-nodes-base.noOp",
        "typeVersion": 1,
        "position": [0, 0],
        "parameters": {"key": "value"},
    }
    node.update(overrides)
    return node


def _workflow(*nodes, connections=None, **extra):
    wf = {"nodes": list(nodes), "connections": connections or {}}
    wf.update(extra)
    return wf


def _link(target, index=0, conn_type="main"):
    return {"node": target, "type": conn_type, "index": index}


@pytest.fixture
def make_node():
    return _node


@pytest.fixture
def make_workflow():
    return _workflow


@pytest.fixture
def link():
    return _link


@pytest.fixture
def minimal_workflow():
    return copy.deepcopy({
        "nodes": [
            {
                "id": "n1",
                "name": "Start",
                "type": "manualTrigger",
                "typeVersion": 1,
                "position": [0, 0],
                "parameters": {},
            }
        ],
        "connections": {},
    })
