#n8nlint/structural/schema.py
# Shape of an n8n workflow export. Consistency rules (unique ids, dangling
# connections, ranges) live in n8nlint/consistency, not here.

ON_ERROR_MODES = ["continueErrorOutput", "continueRegularOutput", "stopWorkflow"]

CONNECTION_SCHEMA = {
    "type": "object",
    "required": ["node", "type", "index"],
    "properties": {
        "node": {"type": "string"},
        "type": {"type": "string"},
        # sign is checked later, negative indices are a reference violation
        "index": {"type": "number"},
    },
}

# "main": [ [ {conn}, {conn} ], null, [ {conn} ] ]
#           output 0            output 1 (unconnected)
NODE_CONNECTIONS_SCHEMA = {
    "type": "object",
    "additionalProperties": {
        "type": "array",
        "items": {
            "type": ["array", "null"],
            "items": CONNECTION_SCHEMA,
        },
    },
}

CONNECTIONS_SCHEMA = {
    "type": "object",
    "additionalProperties": NODE_CONNECTIONS_SCHEMA,
}

NODE_CREDENTIALS_SCHEMA = {
    "type": "object",
    "additionalProperties": {
        "type": "object",
        "required": ["id", "name"],
        "properties": {
            "id": {"type": ["string", "null"]},
            "name": {"type": "string"},
        },
    },
}

NODE_SCHEMA = {
    "type": "object",
    "required": ["id", "name", "type", "typeVersion", "position", "parameters"],
    "properties": {
        "id": {"type": "string"},
        "name": {"type": "string"},
        "type": {"type": "string"},
        "typeVersion": {"type": "number"},
        "position": {
            "type": "array",
            "items": {"type": "number"},
            "minItems": 2,
            "maxItems": 2,
        },
        # free-form value tree, only its emptiness is ever looked at
        "parameters": {"type": "object"},

        "disabled": {"type": "boolean"},
        "notes": {"type": "string"},
        "notesInFlow": {"type": "boolean"},
        "retryOnFail": {"type": "boolean"},
        "maxTries": {"type": "number"},
        "waitBetweenTries": {"type": "number"},
        "alwaysOutputData": {"type": "boolean"},
        "executeOnce": {"type": "boolean"},
        "onError": {"enum": ON_ERROR_MODES},
        "continueOnFail": {"type": "boolean"},
        "webhookId": {"type": "string"},
        "credentials": NODE_CREDENTIALS_SCHEMA,
    },
}

# Root metadata (id, name, active, settings, staticData, pinData) is allowed
# through without checks.
WORKFLOW_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["nodes", "connections"],
    "properties": {
        "nodes": {
            "type": "array",
            "items": NODE_SCHEMA,
        },
        "connections": CONNECTIONS_SCHEMA,
    },
}
