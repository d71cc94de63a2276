"""Messages and payloads exchanged with the XiaoZhi voice assistant service."""

from __future__ import annotations

import json
import os
import platform
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from deskpet.config import (
    XIAOZHI_APP_NAME,
    XIAOZHI_BOARD_TYPE,
    XIAOZHI_CHIP_ID,
    XIAOZHI_FIRMWARE_VERSION,
)

PROTOCOL_VERSION = 1
AUDIO_SAMPLE_RATE = 16000
AUDIO_CHANNELS = 1
AUDIO_FRAME_DURATION_MS = 60
MCP_DEFAULT_PROTOCOL_VERSION = "2024-11-05"
MCP_METHOD_NOT_FOUND = -32601

_BUILD_TIME = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
_LEADING_INT = re.compile(r"^\s*[+-]?\d+")

JsonText = Union[str, bytes, bytearray]


@dataclass(frozen=True)
class WebSocketEndpoint:
    host: str
    port: int
    path: str
    use_ssl: bool


@dataclass(frozen=True)
class ServerHello:
    """Server greeting; audio fields are None when the server left them out."""

    session_id: str
    sample_rate: Optional[int] = None
    frame_duration: Optional[int] = None


@dataclass(frozen=True)
class VisionEndpoint:
    url: str
    token: str = ""


def dumps(document: Any) -> str:
    """Compact JSON with non-ASCII text kept as is."""
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


def client_id_from_mac(mac: str) -> str:
    """Derive the UUID-shaped client id from a MAC address."""
    c = mac.lower().replace(":", "")
    return f"{c[0:8]}-{c[8:12]}-4{c[1:4]}-a{c[5:8]}-{c[10:12]}{c[0:6]}{c[6:10]}"


def build_user_agent(
    board_type: str = XIAOZHI_BOARD_TYPE, version: str = XIAOZHI_FIRMWARE_VERSION
) -> str:
    return f"{board_type}/{version}"


def build_system_info(device_id: str, client_id: str) -> dict[str, Any]:
    """The device description posted when asking for activation."""
    return {
        "version": 2,
        "language": "zh-CN",
        "flash_size": 0,
        "minimum_free_heap_size": 0,
        "mac_address": device_id,
        "uuid": client_id,
        "chip_model_name": XIAOZHI_CHIP_ID,
        "chip_info": {
            "model": 0,
            "cores": os.cpu_count() or 1,
            "revision": 0,
            "features": 0,
        },
        "application": {
            "name": XIAOZHI_APP_NAME,
            "version": XIAOZHI_FIRMWARE_VERSION,
            "compile_time": _BUILD_TIME,
            "idf_version": platform.python_version(),
            "elf_sha256": "",
        },
        "partition_table": [],
        "ota": {"label": "factory"},
    }


def hello_message(protocol_version: int = PROTOCOL_VERSION) -> str:
    return dumps({
        "type": "hello",
        "version": protocol_version,
        "features": {"mcp": True},
        "transport": "websocket",
        "audio_params": {
            "format": "opus",
            "sample_rate": AUDIO_SAMPLE_RATE,
            "channels": AUDIO_CHANNELS,
            "frame_duration": AUDIO_FRAME_DURATION_MS,
        },
    })


def _tool(name: str, description: str, properties: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "inputSchema": {"type": "object", "properties": properties or {}},
    }


def _enum_property(description: str, values: list[str]) -> dict[str, Any]:
    return {"type": "string", "description": description, "enum": values}


def tools_list() -> dict[str, Any]:
    """The result of an MCP tools/list request."""
    return {"tools": [
        _tool(
            "self.camera.open",
            "打开 CoreS3 摄像头预览。当用户说打开摄像头、让我看看、你能看见吗时调用。",
        ),
        _tool(
            "self.camera.close",
            "关闭 CoreS3 摄像头预览，返回小智 AI 页面。",
        ),
        _tool(
            "self.camera.capture_photo",
            "用 CoreS3 摄像头拍一张照片并保存到 SD 卡。当用户说拍张照、保存一张照片、拍照时调用。",
        ),
        _tool(
            "self.vision.describe_scene",
            "用 CoreS3 摄像头拍照并识别画面。当用户问这是什么、你能看到什么、帮我识别时调用。",
            {"prompt": {"type": "string", "description": "用户关于画面的可选问题。"}},
        ),
        _tool(
            "self.pomodoro.open",
            "打开 CoreS3 番茄钟计时器。当用户说打开番茄钟、开始计时、专注模式时调用。"
            "支持指定分钟数和是否自动开始。只支持5、15、25、50分钟四个预设。",
            {
                "minutes": {
                    "type": "integer",
                    "description": "计时时长（分钟），只支持 5、15、25、50。",
                },
                "auto_start": {
                    "type": "boolean",
                    "description": "是否自动开始计时。默认 false。",
                },
            },
        ),
        _tool(
            "self.music.control",
            "控制 CoreS3 音乐播放。当用户说播放音乐、暂停音乐、停止音乐、下一首时调用。",
            {"action": _enum_property(
                "操作类型：play_pause（播放/暂停）、stop（停止）、next（下一首）",
                ["play_pause", "stop", "next"],
            )},
        ),
        _tool(
            "self.pet.react",
            "让 CoreS3 桌宠做出表情反应。当用户说开心一下、害羞一下、卖个萌、装困、惊讶一下时调用。"
            "只改变表情和短状态文本，不影响 AI 状态。",
            {"reaction": _enum_property(
                "表情类型：happy、shy、curious、sleepy、surprised、sick",
                ["happy", "shy", "curious", "sleepy", "surprised", "sick"],
            )},
        ),
        _tool(
            "self.servo.control",
            "Control the CoreS3 two-axis servo head. Use for look left, look right, look up, "
            "look down, center, nod, shake head, dance, or release servos.",
            {"action": _enum_property(
                "Servo action: center, left, right, up, down, nod, shake, dance, release",
                ["center", "left", "right", "up", "down", "nod", "shake", "dance", "release"],
            )},
        ),
        _tool(
            "self.device.status",
            "Query the current CoreS3 device status including Wi-Fi, SD, music, AI, vision, and memory.",
            {"detail": _enum_property(
                "brief returns 2 short Chinese sentences; full adds heap and PSRAM.",
                ["brief", "full"],
            )},
        ),
        _tool(
            "self.device.control",
            "Control the CoreS3 page, brightness preset, volume preset, or sleep and wake behavior.",
            {
                "page": _enum_property(
                    "Page target: face, menu, wifi, system, camera, music, pomodoro, ai",
                    ["face", "menu", "wifi", "system", "camera", "music", "pomodoro", "ai"],
                ),
                "brightness": _enum_property(
                    "Brightness preset: dim, normal, bright", ["dim", "normal", "bright"]
                ),
                "volume": _enum_property(
                    "Volume preset: quiet, normal, loud", ["quiet", "normal", "loud"]
                ),
                "sleep": _enum_property("Sleep control: wake or sleep", ["wake", "sleep"]),
            },
        ),
    ]}


def mcp_result_message(session_id: str, call_id: int, result: Any) -> str:
    return dumps({
        "session_id": session_id,
        "type": "mcp",
        "payload": {"jsonrpc": "2.0", "id": call_id, "result": result},
    })


def mcp_error_message(session_id: str, call_id: int, message: str) -> str:
    return dumps({
        "session_id": session_id,
        "type": "mcp",
        "payload": {
            "jsonrpc": "2.0",
            "id": call_id,
            "error": {"code": MCP_METHOD_NOT_FOUND, "message": message},
        },
    })


def tool_text_result(text: str, is_error: bool = False) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}], "isError": bool(is_error)}


def listen_start_message(session_id: str) -> str:
    return dumps({"session_id": session_id, "type": "listen", "state": "start", "mode": "auto"})


def listen_stop_message(session_id: str) -> str:
    return dumps({"session_id": session_id, "type": "listen", "state": "stop"})


def abort_message(session_id: str) -> str:
    return dumps({"session_id": session_id, "type": "abort"})


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group()) if match else 0


def parse_websocket_url(url: str) -> WebSocketEndpoint:
    """Split a ws:// or wss:// URL into host, port, path and TLS use."""
    address = url
    path = "/"
    proto_end = url.find("://") + 3
    path_idx = url.find("/", proto_end)
    if path_idx > 0:
        path = url[path_idx:]
        address = url[:path_idx]

    port = 443
    use_ssl = True
    if address.startswith("ws://"):
        address = address[5:]
        use_ssl = False
        port = 80
    elif address.startswith("wss://"):
        address = address[6:]

    colon = address.find(":")
    if colon > 0:
        port = _to_int(address[colon + 1:])
        address = address[:colon]

    return WebSocketEndpoint(host=address, port=port, path=path, use_ssl=use_ssl)


def _load(data: Union[JsonText, Mapping[str, Any]]) -> Mapping[str, Any]:
    document = data if isinstance(data, Mapping) else json.loads(data)
    if not isinstance(document, Mapping):
        raise ValueError("expected a JSON object")
    return document


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def parse_server_hello(data: Union[JsonText, Mapping[str, Any]]) -> ServerHello:
    """Read the server's hello; raises ValueError for bad JSON or a foreign transport."""
    document = _load(data)
    transport = _text(document.get("transport"))
    if transport != "websocket":
        raise ValueError(f"unsupported transport: {transport}")

    sample_rate = frame_duration = None
    audio = document.get("audio_params")
    if isinstance(audio, Mapping):
        rate = audio.get("sample_rate")
        if isinstance(rate, (int, float)) and not isinstance(rate, bool):
            sample_rate = int(rate)
        duration = audio.get("frame_duration")
        if isinstance(duration, (int, float)) and not isinstance(duration, bool):
            frame_duration = int(duration)

    return ServerHello(
        session_id=_text(document.get("session_id")),
        sample_rate=sample_rate,
        frame_duration=frame_duration,
    )


def parse_initialize_params(params: Any) -> Optional[VisionEndpoint]:
    """The vision endpoint offered in MCP initialize params, if any."""
    if not isinstance(params, Mapping):
        return None
    capabilities = params.get("capabilities")
    if not isinstance(capabilities, Mapping):
        return None
    vision = capabilities.get("vision")
    if not isinstance(vision, Mapping):
        return None
    url = _text(vision.get("url"))
    if not url:
        return None
    return VisionEndpoint(url=url, token=_text(vision.get("token")))