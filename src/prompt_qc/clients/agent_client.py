"""Async HTTP client for the external agent generation service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from prompt_qc.models.agent import Agent, AgentPrompt

logger = logging.getLogger(__name__)


class AgentServiceError(Exception):
    """A request to the agent service failed or returned a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class AgentServiceClient:
    """Thin wrapper over ``httpx.AsyncClient`` for the agent API.

    No retries are attempted and no timeout is applied unless one is given:
    every harness step waits for the service to answer.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def __aenter__(self) -> AgentServiceClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        logger.debug("Agent service %s %s", method, path)
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Agent service request failed: %s %s", method, path, exc_info=True)
            raise AgentServiceError(f"{type(exc).__name__}: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {"data": body}

        if response.is_error:
            message = body.get("error") or response.reason_phrase or "request failed"
            logger.warning(
                "Agent service %s %s returned %d: %s",
                method, path, response.status_code, message,
            )
            raise AgentServiceError(str(message), status_code=response.status_code)
        return body

    async def get_agent(self, agent_id: str) -> Agent | None:
        """Fetch an agent descriptor. Returns None when the agent does not exist."""
        try:
            body = await self._request("GET", f"/agent/{agent_id}")
        except AgentServiceError as exc:
            if exc.not_found:
                return None
            raise
        data = body.get("agent")
        if not data:
            return None
        return Agent.model_validate(data)

    async def generate(
        self,
        agent_id: str,
        topics: list[dict[str, str]],
        batch_size: int,
    ) -> dict[str, Any]:
        """Trigger generation. Returns ``{success, generated, results}``."""
        logger.info("Requesting generation of %d topic(s) for agent %s", len(topics), agent_id)
        return await self._request(
            "POST",
            "/agent/generate",
            json={"agent_id": agent_id, "topics": topics, "batch_size": batch_size},
        )

    async def list_prompts(self, agent_id: str, limit: int) -> list[AgentPrompt]:
        """Fetch up to ``limit`` of the agent's most recent prompts."""
        body = await self._request(
            "GET",
            "/agent/prompts",
            params={"agent_id": agent_id, "limit": limit},
        )
        return [AgentPrompt.model_validate(p) for p in body.get("prompts") or []]
