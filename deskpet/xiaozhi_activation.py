"""Device activation against the XiaoZhi OTA endpoint."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional

import requests

from deskpet.config import XIAOZHI_REAL_ACTIVATION
from deskpet.xiaozhi_protocol import build_system_info, build_user_agent, dumps

log = logging.getLogger(__name__)

OTA_URL = "https://api.tenclass.net/xiaozhi/ota/"
ACTIVATION_ERROR_COOLDOWN_MS = 30000
REQUEST_TIMEOUT_S = 15.0
CONNECTION_FAILED = -1


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else json.dumps(value)


class ActivationClient:
    """Asks the OTA service for an activation code and the WebSocket credentials."""

    def __init__(
        self,
        device_id: str,
        client_id: str,
        http: Optional[Any] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.device_id = device_id
        self.client_id = client_id
        self._http = http if http is not None else requests.Session()
        self._clock = clock or _monotonic_ms
        self.connected = False
        self.activated = False
        self.has_activation_code = False
        self.activation_code = ""
        self.activation_message = ""
        self.websocket_url = ""
        self.token = ""
        self.last_error = ""
        self.last_http_code = 0
        self._last_attempt_ms = 0
        self._last_error_ms = 0

    @property
    def firmware_identity(self) -> str:
        return build_user_agent()

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": build_user_agent(),
            "Content-Type": "application/json",
            "Activation-Version": "1",
            "Device-Id": self.device_id,
            "Client-Id": self.client_id,
            "Accept-Language": "zh-CN",
        }

    def _in_cooldown(self, now: int) -> bool:
        return (
            self.last_http_code >= 400
            and self._last_error_ms > 0
            and now - self._last_error_ms < ACTIVATION_ERROR_COOLDOWN_MS
        )

    def _fail(self, code: int, body: str) -> bool:
        log.warning("XiaoZhi: OTA failed code=%d body=%s", code, body)
        self.last_http_code = code
        self._last_error_ms = self._clock()
        self.last_error = f"HTTP {code}"
        return False

    def request_activation_code(self, network_up: bool) -> bool:
        """POST the device description; True if a code or WebSocket config arrived."""
        if not XIAOZHI_REAL_ACTIVATION:
            return False
        if not network_up:
            self.connected = False
            return False
        now = self._clock()
        if self._in_cooldown(now):
            return False
        self._last_attempt_ms = now

        body = dumps(build_system_info(self.device_id, self.client_id))
        log.info("XiaoZhi: OTA POST identity=%s", build_user_agent())
        try:
            response = self._http.post(
                OTA_URL,
                data=body.encode("utf-8"),
                headers=self._headers(),
                timeout=REQUEST_TIMEOUT_S,
            )
        except requests.RequestException as exc:
            return self._fail(CONNECTION_FAILED, str(exc))

        if response.status_code != 200:
            return self._fail(response.status_code, response.text)

        self.last_http_code = response.status_code
        self.last_error = ""
        self.connected = True
        log.info("XiaoZhi: OTA response: %s", response.text)

        try:
            document = json.loads(response.text)
        except ValueError as exc:
            log.warning("XiaoZhi: JSON parse failed: %s", exc)
            return False
        if not isinstance(document, Mapping):
            log.warning("XiaoZhi: JSON parse failed: not an object")
            return False

        self._apply_activation(document.get("activation"))
        self._apply_websocket(document.get("websocket"))
        return self.has_activation_code or self.activated

    def _apply_activation(self, activation: Any) -> None:
        if not isinstance(activation, Mapping):
            return
        code = activation.get("code")
        if code is not None:
            self.activation_code = _as_text(code)
            self.has_activation_code = True
            log.info("XiaoZhi: activation code: %s", self.activation_code)
        message = activation.get("message")
        if message is not None:
            self.activation_message = _as_text(message)

    def _apply_websocket(self, websocket: Any) -> None:
        if not isinstance(websocket, Mapping):
            return
        url = websocket.get("url")
        if url is not None:
            self.websocket_url = _as_text(url)
        token = websocket.get("token")
        if token is not None:
            self.token = _as_text(token)
        if self.websocket_url and self.token:
            self.activated = True
            log.info("XiaoZhi: device activated, got WS config")

    def check_activation(self, network_up: bool) -> bool:
        """True once the device holds WebSocket credentials, asking the service if needed."""
        if not XIAOZHI_REAL_ACTIVATION or not network_up:
            return False
        if self.activated:
            return True
        self.request_activation_code(network_up)
        return self.activated