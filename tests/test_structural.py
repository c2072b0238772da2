import copy

import pytest

from n8nlint.structural.checker import structural_check
from n8nlint.types import Connection, Workflow


def _paths(report):
    return [e.path for e in report.errors]


def test_missing_nodes_reports_expected_array():
    report = structural_check({"connections": {}})

    assert not report.valid
    assert report.workflow is None
    assert _paths(report) == ["nodes"]
    assert "array" in report.errors[0].message


def test_missing_connections_is_invalid():
    report = structural_check({"nodes": []})

    assert not report.valid
    assert _paths(report) == ["connections"]
    assert "object" in report.errors[0].message


def test_non_object_root_uses_root_path():
    report = structural_check([1, 2, 3])

    assert _paths(report) == ["root"]
    assert report.errors[0].message == "Expected object, received array"


def test_none_root():
    report = structural_check(None)

    assert report.errors[0].message == "Expected object, received null"


def test_every_missing_node_field_is_reported(make_workflow):
    report = structural_check(make_workflow({}))

    assert _paths(report) == [
        "nodes.0.id",
        "nodes.0.name",
        "nodes.0.type",
        "nodes.0.typeVersion",
        "nodes.0.position",
        "nodes.0.parameters",
    ]
    assert report.errors[3].message == 'Required property "typeVersion" is missing (expected number)'


@pytest.mark.parametrize(
    "position, path, message",
    [
        ([0], "nodes.0.position", "Expected exactly 2 items, received 1"),
        ([0, 0, 0], "nodes.0.position", "Expected exactly 2 items, received 3"),
        ([0, "1"], "nodes.0.position.1", "Expected number, received string"),
        ({"x": 0, "y": 0}, "nodes.0.position", "Expected array, received object"),
    ],
)
def test_position_shape(make_node, make_workflow, position, path, message):
    report = structural_check(make_workflow(make_node(position=position)))

    assert _paths(report) == [path]
    assert report.errors[0].message == message


def test_boolean_is_not_a_number(make_node, make_workflow):
    report = structural_check(make_workflow(make_node(typeVersion=True)))

    assert _paths(report) == ["nodes.0.typeVersion"]
    assert report.errors[0].message == "Expected number, received boolean"


def test_on_error_enum(make_node, make_workflow):
    report = structural_check(make_workflow(make_node(onError="ignore")))

    assert _paths(report) == ["nodes.0.onError"]
    msg = report.errors[0].message
    assert msg.startswith("Invalid option")
    assert '"stopWorkflow"' in msg
    assert msg.endswith('received "ignore"')


@pytest.mark.parametrize("mode", ["continueErrorOutput", "continueRegularOutput", "stopWorkflow"])
def test_on_error_modes_accepted(make_node, make_workflow, mode):
    assert structural_check(make_workflow(make_node(onError=mode))).valid


@pytest.mark.parametrize(
    "field, value",
    [
        ("disabled", "yes"),
        ("notes", 3),
        ("notesInFlow", 1),
        ("retryOnFail", "true"),
        ("maxTries", "3"),
        ("waitBetweenTries", None),
        ("alwaysOutputData", 0),
        ("executeOnce", []),
        ("continueOnFail", {}),
        ("webhookId", 12),
        ("parameters", []),
        ("credentials", "slack"),
    ],
)
def test_optional_fields_wrong_type(make_node, make_workflow, field, value):
    report = structural_check(make_workflow(make_node(**{field: value})))

    assert _paths(report) == [f"nodes.0.{field}"]


def test_credentials_shape(make_node, make_workflow):
    ok = make_node(credentials={"slackApi": {"id": None, "name": "Slack"}})
    assert structural_check(make_workflow(ok)).valid

    bad = make_node(credentials={"slackApi": {"id": "1"}})
    report = structural_check(make_workflow(bad))
    assert _paths(report) == ["nodes.0.credentials.slackApi.name"]


def test_null_output_slot_is_allowed(make_node, make_workflow, link):
    wf = make_workflow(
        make_node("A"), make_node("B"),
        connections={"A": {"main": [None, [link("B")]]}},
    )
    report = structural_check(wf)

    assert report.valid
    assert report.workflow.connections["A"]["main"][0] is None
    assert report.workflow.connections["A"]["main"][1] == [Connection(node="B", type="main", index=0)]


def test_bad_connection_shapes(make_node, make_workflow):
    wf = make_workflow(
        make_node("A"),
        connections={
            "A": {
                "main": ["B", [{"node": "B", "type": "main"}]],
                "ai_tool": {"node": "B"},
            }
        },
    )
    report = structural_check(wf)

    assert set(_paths(report)) == {
        "connections.A.main.0",
        "connections.A.main.1.0.index",
        "connections.A.ai_tool",
    }
    by_path = {e.path: e.message for e in report.errors}
    assert by_path["connections.A.main.0"] == "Expected array or null, received string"


def test_root_metadata_passes_through(minimal_workflow):
    minimal_workflow.update({
        "id": 42,
        "name": None,
        "active": "sometimes",
        "settings": {"executionOrder": "v1"},
        "staticData": None,
        "pinData": {"Start": [{"json": {}}]},
        "meta": {"instanceId": "abc"},
    })
    report = structural_check(minimal_workflow)

    assert report.valid
    assert report.workflow.id == 42
    assert report.workflow.settings == {"executionOrder": "v1"}
    assert report.workflow.pin_data == {"Start": [{"json": {}}]}


def test_unknown_node_keys_are_allowed(make_node, make_workflow):
    assert structural_check(make_workflow(make_node(color=3, extra={"a": 1}))).valid


def test_typed_workflow_is_built(make_node, make_workflow):
    node = make_node(
        "Slack",
        typeVersion=2.2,
        position=[10, -20.5],
        disabled=False,
        retryOnFail=True,
        maxTries=3,
        onError="stopWorkflow",
        credentials={"slackApi": {"id": "7", "name": "Slack account"}},
    )
    report = structural_check(make_workflow(node))

    assert isinstance(report.workflow, Workflow)
    n = report.workflow.nodes[0]
    assert n.name == "Slack"
    assert n.type_version == 2.2
    assert n.position == (10, -20.5)
    assert n.retry_on_fail is True
    assert n.max_tries == 3
    assert n.on_error == "stopWorkflow"
    assert n.credentials["slackApi"].id == "7"
    assert n.credentials["slackApi"].name == "Slack account"


def test_empty_nodes_is_valid_with_warning():
    report = structural_check({"nodes": [], "connections": {}})

    assert report.valid
    assert report.errors == []
    assert [w.path for w in report.warnings] == ["nodes"]
    assert report.warnings[0].kind == "warning"
    assert "no nodes" in report.warnings[0].message


def test_schema_failure_has_no_warnings():
    report = structural_check({"nodes": [], "connections": []})

    assert not report.valid
    assert report.warnings == []


def test_input_is_not_mutated(make_node, make_workflow, link):
    wf = make_workflow(
        make_node("A"), make_node("B"),
        connections={"A": {"main": [[link("B")], None]}},
    )
    before = copy.deepcopy(wf)
    structural_check(wf)

    assert wf == before
