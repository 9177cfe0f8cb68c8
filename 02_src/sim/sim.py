"""SIM implementation - hardcoded interaction scenario against a running agent."""

import asyncio
from typing import Protocol

import httpx

from rumcore.logging_config import get_logger

logger = get_logger(__name__)

SAVE_BUTTON = {
    "tag_name": "BUTTON",
    "attributes": {"class": "btn-primary"},
    "text_content": "Save",
    "has_child_nodes": True,
}

DECORATION = {
    "tag_name": "DIV",
    "attributes": {"class": "spacer"},
    "parent": {"tag_name": "SECTION", "attributes": {"aria-label": "Settings"}},
}


class ISim(Protocol):
    """Generate test signals. Hardcoded scenario."""

    async def start(self) -> None:
        """Start hardcoded scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """SIM with hardcoded scenario for manual testing."""

    def __init__(self, api_url: str = "http://localhost:8000"):
        self._api_url = api_url
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None

    async def start(self) -> None:
        """Start hardcoded scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(base_url=self._api_url, timeout=10.0)
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        if self._client:
            await self._client.aclose()

    async def wait(self) -> None:
        """Wait for the scenario to finish."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        """Run hardcoded scenario."""
        try:
            # 1. Click followed by page activity: expect "completed"
            await self._post("/api/signals/input", {"type": "click", "target": SAVE_BUTTON})
            await asyncio.sleep(0.02)
            await self._post("/api/signals/dom-mutation")
            await asyncio.sleep(0.05)
            await self._post(
                "/api/signals/performance-entry",
                {
                    "entry_type": "resource",
                    "name": f"{self._api_url}/static/app.js",
                    "initiator_type": "script",
                },
            )
            await asyncio.sleep(0.5)

            # 2. Click with no follow-up activity: expect "ignored"
            if self._running:
                await self._post("/api/signals/input", {"type": "click", "target": DECORATION})
                await asyncio.sleep(0.5)

            if self._running:
                await self._log_reports()

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)

    async def _post(self, path: str, payload: dict | None = None) -> None:
        if not self._client:
            return

        try:
            response = await self._client.post(path, json=payload)
            if response.status_code != 202:
                logger.error("SIM: %s rejected with %s", path, response.status_code)
        except Exception as e:
            logger.error("SIM: Failed to post %s: %s", path, e)

    async def _log_reports(self) -> None:
        if not self._client:
            return

        response = await self._client.get(
            "/api/interactions", params={"event_type": "interaction_collected"}
        )
        for entry in response.json():
            data = entry["data"]
            logger.info(
                "SIM: %s %s duration=%s",
                data["name"],
                data["context"].get("content"),
                data.get("duration"),
            )


async def run(api_url: str = "http://localhost:8000") -> None:
    sim = Sim(api_url=api_url)
    await sim.start()
    try:
        await sim.wait()
    finally:
        await sim.stop()


if __name__ == "__main__":
    from rumcore.logging_config import setup_logging

    setup_logging()
    asyncio.run(run())
