# n8nlint/templates/client.py
"""
Minimal client for the public n8n template API.

Used to pull real-world workflows for exercising the validator; nothing in
the validation core depends on it.

Configuration (env):
    N8NLINT_TEMPLATES_URL   API base (default https://api.n8n.io/api/templates)
    N8NLINT_HTTP_TIMEOUT    request timeout in seconds (default 30)
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from n8nlint.utils.logger import get_logger

logger = get_logger("templates")

DEFAULT_BASE_URL = "https://api.n8n.io/api/templates"
DEFAULT_TIMEOUT = 30.0

# random picks are drawn from at most this many listed templates
MAX_LIST_FETCH = 500


@dataclass(frozen=True)
class FetchedWorkflow:
    id: int
    name: str
    workflow: Dict[str, Any]


def _env_base_url() -> str:
    return os.environ.get("N8NLINT_TEMPLATES_URL", DEFAULT_BASE_URL).rstrip("/")


def _env_timeout() -> float:
    raw = os.environ.get("N8NLINT_HTTP_TIMEOUT")
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT
    except ValueError:
        logger.warning("ignoring non-numeric N8NLINT_HTTP_TIMEOUT=%r", raw)
        return DEFAULT_TIMEOUT


class TemplateClient:
    """Synchronous wrapper around the template search/detail endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = (base_url or _env_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else _env_timeout()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=self.timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TemplateClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _get_json(self, url: str, **params: Any) -> Dict[str, Any]:
        response = self._client.get(
            url,
            params=params or None,
            headers={"Accept": "application/json"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object from {url}, got {type(data).__name__}")
        return data

    def fetch_workflow_list(self, limit: int = 100) -> List[Dict[str, Any]]:
        """Return `[{id, name}, ...]` from the search endpoint."""
        data = self._get_json(f"{self.base_url}/search", limit=limit)
        return [{"id": w["id"], "name": w["name"]} for w in data.get("workflows") or []]

    def fetch_workflow_details(self, workflow_id: int) -> FetchedWorkflow:
        data = self._get_json(f"{self.base_url}/workflows/{workflow_id}")
        wf = data["workflow"]
        return FetchedWorkflow(id=wf["id"], name=wf["name"], workflow=wf["workflow"])

    def fetch_random_workflow_ids(
        self, count: int, rng: Optional[random.Random] = None
    ) -> List[Dict[str, Any]]:
        """Sample `count` distinct templates (fewer if the listing is short)."""
        workflows = self.fetch_workflow_list(limit=MAX_LIST_FETCH)
        if not workflows:
            return []
        rng = rng or random.Random()
        return rng.sample(workflows, min(count, len(workflows)))

    def fetch_random_workflows(
        self, count: int = 5, rng: Optional[random.Random] = None
    ) -> List[FetchedWorkflow]:
        """
        Fetch details for `count` random templates. A failure on one template
        is logged and skipped; a failure listing templates propagates.
        """
        out: List[FetchedWorkflow] = []
        for item in self.fetch_random_workflow_ids(count, rng=rng):
            try:
                out.append(self.fetch_workflow_details(item["id"]))
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
                logger.warning("failed to fetch workflow %s: %s", item["id"], e)
        return out
