from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .types import (
    AutoSwitchAction,
    AutoSwitchPayload,
    AvoidSwitchPayload,
    SelectSwitchPayload,
    StatusEnvelopePayload,
    SwitchPayload,
)

DEFAULT_TIMEOUT = 10.0


class ApiClientError(RuntimeError):
    """Raised when an API call fails."""

    def __init__(
        self,
        status_code: int,
        message: str,
        payload: Any | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.path = path


@dataclass(frozen=True)
class CommandResult:
    """Uniform result of an administrative command."""

    success: bool
    error: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "CommandResult":
        if not isinstance(payload, dict):
            return cls(success=False)
        error = payload.get("error")
        if not isinstance(error, str) or not error.strip():
            error = None
        return cls(success=payload.get("success") is True, error=error)


class SwitcherAPIClient:
    """Typed HTTP client for the switcher control contract."""

    def __init__(
        self,
        *,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            transport=transport,
            timeout=timeout,
            headers=headers or None,
        )

        if client is not None and headers:
            self._client.headers.update(headers)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        response = await self._client.request(method, path, json=json_body)

        self._raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _request_text(self, method: str, path: str) -> str:
        response = await self._client.request(method, path)

        self._raise_for_status(response)
        return response.text

    @staticmethod
    def _extract_error_message(payload: Any, fallback: str) -> str:
        if isinstance(payload, dict):
            err = payload.get("error")
            if isinstance(err, str) and err.strip():
                return err
            message = payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return fallback

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return

        payload: Any | None
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        message = self._extract_error_message(
            payload,
            f"HTTP {response.status_code} for {response.request.method} {response.request.url.path}",
        )
        raise ApiClientError(
            status_code=response.status_code,
            message=message,
            payload=payload,
            path=response.request.url.path,
        )

    async def _command(self, path: str, json_body: dict[str, Any] | None = None) -> CommandResult:
        try:
            result = await self._request_json("POST", path, json_body=json_body)
        except ApiClientError as exc:
            # Rejected commands arrive as 4xx with a {"success": false, "error": ...} body.
            if isinstance(exc.payload, dict) and "success" in exc.payload:
                return CommandResult.from_payload(exc.payload)
            raise
        return CommandResult.from_payload(result)

    async def get_status(self) -> StatusEnvelopePayload:
        result = await self._request_json("GET", "/api/status")
        if not isinstance(result, dict):
            raise ValueError("status response is not a JSON object")
        return result

    async def switch(self, payload: SwitchPayload) -> CommandResult:
        return await self._command("/api/switch", dict(payload))

    async def switch_avoid(self, avoid_server: Optional[str]) -> CommandResult:
        """Ask the backend for its best server other than ``avoid_server``.

        The field is omitted when the active server is unknown.
        """
        payload: AvoidSwitchPayload = {"type": "avoid"}
        if avoid_server:
            payload["avoid_server"] = avoid_server
        return await self.switch(payload)

    async def switch_select(self, target_server: str) -> CommandResult:
        payload: SelectSwitchPayload = {"type": "select", "target_server": target_server}
        return await self.switch(payload)

    async def set_auto_switch(self, action: AutoSwitchAction) -> CommandResult:
        payload: AutoSwitchPayload = {"action": action}
        return await self._command("/api/auto-switch", dict(payload))

    async def trigger_update(self) -> CommandResult:
        return await self._command("/api/update")

    async def get_logs(self) -> str:
        return await self._request_text("GET", "/api/logs")

    async def refresh_subscription(self) -> str:
        return await self._request_text("GET", "/s")

    async def ping_servers(self) -> str:
        return await self._request_text("GET", "/p")
