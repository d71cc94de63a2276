"""Snapshot of device status and the short texts shown or spoken about it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class BrightnessLevel(Enum):
    DIM = auto()
    NORMAL = auto()
    BRIGHT = auto()


class VolumeLevel(Enum):
    QUIET = auto()
    NORMAL = auto()
    LOUD = auto()


class MusicState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()
    ERROR = auto()


class SystemVoiceState(Enum):
    IDLE = auto()
    LISTENING = auto()
    THINKING = auto()
    SPEAKING = auto()
    ERROR = auto()


@dataclass
class WifiStatus:
    connected: bool = False
    configured: bool = False
    rssi: int = 0
    ip: str = "--.--.--.--"


@dataclass
class SdStatus:
    ready: bool = False
    status_text: str = "Not initialized"


@dataclass
class MusicStatus:
    playback_state: MusicState = MusicState.STOPPED
    current_title: str = ""
    status_text: str = "No music"


@dataclass
class AiStatus:
    activated: bool = False
    ws_connected: bool = False
    audio_channel_open: bool = False
    voice_state: SystemVoiceState = SystemVoiceState.IDLE
    vision_ready: bool = False


@dataclass
class MemoryStatus:
    heap_kb: int = 0
    psram_kb: int = 0


@dataclass
class ControlStatus:
    brightness_level: BrightnessLevel = BrightnessLevel.BRIGHT
    volume_level: VolumeLevel = VolumeLevel.NORMAL


@dataclass
class SystemStatus:
    """Everything the status page and the status tool report; compares by value."""

    wifi: WifiStatus = field(default_factory=WifiStatus)
    sd: SdStatus = field(default_factory=SdStatus)
    music: MusicStatus = field(default_factory=MusicStatus)
    ai: AiStatus = field(default_factory=AiStatus)
    memory: MemoryStatus = field(default_factory=MemoryStatus)
    control: ControlStatus = field(default_factory=ControlStatus)


def trim_status_text(text: str, max_len: int) -> str:
    """Shorten text to max_len characters, ending with '...' when there is room."""
    if len(text) <= max_len:
        return text
    if max_len < 4:
        return text[:max_len]
    return text[: max_len - 3] + "..."


def brightness_label(level: BrightnessLevel) -> str:
    if level is BrightnessLevel.DIM:
        return "Dim"
    if level is BrightnessLevel.NORMAL:
        return "Normal"
    return "Bright"


def volume_label(level: VolumeLevel) -> str:
    if level is VolumeLevel.QUIET:
        return "Quiet"
    if level is VolumeLevel.NORMAL:
        return "Normal"
    return "Loud"


def xiaozhi_summary(status: SystemStatus) -> str:
    ai = status.ai
    if ai.voice_state is SystemVoiceState.ERROR:
        return "Error"
    if ai.audio_channel_open and ai.voice_state is SystemVoiceState.SPEAKING:
        return "Speaking"
    if ai.audio_channel_open and ai.voice_state is SystemVoiceState.LISTENING:
        return "Listening"
    if ai.ws_connected or ai.audio_channel_open or ai.activated:
        return "Connected"
    return "Offline"


def vision_summary(status: SystemStatus) -> str:
    return "Ready" if status.ai.vision_ready else "No endpoint"


def wifi_line(status: SystemStatus) -> str:
    if not status.wifi.connected:
        return "Offline"
    return f"Online {status.wifi.rssi} dBm"


def sd_line(status: SystemStatus) -> str:
    if status.sd.ready:
        return "Ready"
    if not status.sd.status_text:
        return "Unavailable"
    return trim_status_text(status.sd.status_text, 22)


_MUSIC_AUDIO_LINES = {
    MusicState.PLAYING: "Music playing",
    MusicState.PAUSED: "Music paused",
    MusicState.ERROR: "Music error",
}

_AI_AUDIO_LINES = {
    SystemVoiceState.SPEAKING: "AI speaking",
    SystemVoiceState.LISTENING: "AI listening",
    SystemVoiceState.THINKING: "AI thinking",
}


def audio_line(status: SystemStatus) -> str:
    music_line = _MUSIC_AUDIO_LINES.get(status.music.playback_state)
    if music_line is not None:
        return music_line
    if status.ai.audio_channel_open:
        ai_line = _AI_AUDIO_LINES.get(status.ai.voice_state)
        if ai_line is not None:
            return ai_line
    return "Idle"


def control_line(status: SystemStatus) -> str:
    return (
        f"{brightness_label(status.control.brightness_level)} / "
        f"{volume_label(status.control.volume_level)}"
    )


def memory_line(status: SystemStatus) -> str:
    return f"Heap {status.memory.heap_kb} KB / PSRAM {status.memory.psram_kb} KB"


def _music_sentence_part(status: SystemStatus) -> str:
    state = status.music.playback_state
    if state is MusicState.PLAYING:
        if status.music.current_title:
            return "音乐正在播放《" + trim_status_text(status.music.current_title, 12) + "》"
        return "音乐正在播放"
    if state is MusicState.PAUSED:
        return "音乐已经暂停"
    if state is MusicState.ERROR:
        return "音乐暂时不可用"
    return "音乐现在空闲"


_AI_SENTENCES = {
    "Listening": "小智正在聆听",
    "Speaking": "小智正在说话",
    "Connected": "小智已经连上了",
    "Error": "小智当前有点忙乱",
}


def _ai_sentence_part(status: SystemStatus) -> str:
    return _AI_SENTENCES.get(xiaozhi_summary(status), "小智目前离线")


def brief_sentence1(status: SystemStatus) -> str:
    """Spoken sentence about Wi-Fi and the SD card."""
    if status.wifi.connected:
        sentence = f"Wi-Fi 已连接，信号 {status.wifi.rssi} dBm"
    elif status.wifi.configured:
        sentence = "Wi-Fi 当前离线"
    else:
        sentence = "Wi-Fi 还没有配置"

    if status.sd.ready:
        sentence += "，SD 卡已就绪。"
    elif status.sd.status_text:
        sentence += "，SD 卡暂不可用（" + trim_status_text(status.sd.status_text, 14) + "）。"
    else:
        sentence += "，SD 卡暂不可用。"
    return sentence


def brief_sentence2(status: SystemStatus) -> str:
    """Spoken sentence about music, the assistant and the vision endpoint."""
    vision = "，视觉接口已就绪。" if status.ai.vision_ready else "，视觉接口还没配置。"
    return _music_sentence_part(status) + "，" + _ai_sentence_part(status) + vision


def memory_sentence(status: SystemStatus) -> str:
    return f"当前堆内存 {status.memory.heap_kb} KB，PSRAM {status.memory.psram_kb} KB。"