# deskpet

This package holds the logic behind a small desktop companion pet. It does
not touch any hardware. It provides:

- touch gesture recognition
- an affinity score that is kept between runs
- status texts for display and for speech
- discovery of music files and WAV header parsing
- message builders and parsers for the XiaoZhi voice-assistant service
- the XiaoZhi activation exchange

Where timing matters, the clock can be passed in as a callable that returns
milliseconds. The HTTP session used for activation can be passed in the same
way. This lets you test everything on a normal machine.

## Installation

```
pip install .
```

To install the test tools as well:

```
pip install ".[test]"
```

## Modules

### `deskpet.config`

Tuning constants. Among them:

- gesture thresholds, such as `TAP_THRESHOLD_MS` and `RELAXED_SWIPE_THRESHOLD_PX`
- affinity bounds
- `MUSIC_DIR`
- the firmware identity: `XIAOZHI_BOARD_TYPE`, `XIAOZHI_FIRMWARE_VERSION` and related values

### `deskpet.affinity`

`AffinityManager(store_path, clock=None)` tracks a friendship score.

- The score is clamped to 0–100.
- `begin()` loads the score from a JSON file. If the file is missing or unreadable, it falls back to 35.
- `add(delta, reason)` changes the score. It saves at most once every 5 seconds.
- `reset()` returns the score to the default and saves at once.
- The current state is exposed as the properties `value`, `recent`, `level_name` and `mood_name`.

### `deskpet.gestures`

`GestureManager(callback=None, clock=None)` takes `TouchPoint(x, y, touched)` samples through `update()`.

It emits `GestureEvent`s with these `GestureType`s:

- `SINGLE_TAP`
- `DOUBLE_TAP`
- `LEFT_SWIPE`, `RIGHT_SWIPE`, `UP_SWIPE` and `DOWN_SWIPE`
- `LONG_PRESS`

A single tap is only emitted once the double-tap window (300 ms) has passed.

### `deskpet.system_status`

`SystemStatus` is a dataclass snapshot. It is made of `WifiStatus`, `SdStatus`, `MusicStatus`, `AiStatus`, `MemoryStatus` and `ControlStatus`, and snapshots compare by value.

These functions render a snapshot:

- short lines: `wifi_line`, `sd_line`, `audio_line`, `control_line` and `memory_line`
- summaries: `xiaozhi_summary` and `vision_summary`
- spoken Chinese sentences: `brief_sentence1`, `brief_sentence2` and `memory_sentence`
- `trim_status_text` shortens a text to a maximum length, ending it with `...` when there is room.

### `deskpet.music_library`

- `scan_music_dir(path, max_tracks=16)` lists the `.wav` and `.mp3` files directly inside a folder as `Track`s, sorted by name. It raises `FileNotFoundError` if the folder is missing and `NotADirectoryError` if the path is not a folder.
- `has_audio_extension(name)` reports whether a file name ends in one of those extensions.
- `parse_wav(stream)` reads the header of a seekable binary stream and returns a `WavInfo`. It accepts 8- or 16-bit PCM with one or two channels. Anything else raises `WavError`.

### `deskpet.xiaozhi_protocol`

Builders:

- `client_id_from_mac`
- `build_user_agent`
- `build_system_info`
- `hello_message`
- `tools_list`, which returns the MCP tools this device offers
- `mcp_result_message` and `mcp_error_message`
- `tool_text_result`
- `listen_start_message`, `listen_stop_message` and `abort_message`

Parsers:

- `parse_websocket_url` returns a `WebSocketEndpoint`.
- `parse_server_hello` returns a `ServerHello`. It raises `ValueError` for bad JSON or for a transport other than WebSocket.
- `parse_initialize_params` returns a `VisionEndpoint`, or `None`.

### `deskpet.xiaozhi_activation`

`ActivationClient(device_id, client_id, http=None, clock=None)` posts the device description to the OTA endpoint.

- `request_activation_code(network_up)` makes the request. It records the activation code and message, and the WebSocket URL and token.
- After an HTTP error, further requests are held back for 30 seconds.
- `check_activation(network_up)` returns `True` once the client holds WebSocket credentials. It asks the service if it does not have them yet.

## Example

```python
from deskpet.gestures import GestureManager, TouchPoint

events = []
gm = GestureManager(callback=events.append)
gm.update(TouchPoint(x=10, y=100, touched=True))
gm.update(TouchPoint(x=120, y=100, touched=True))
gm.update(TouchPoint(x=120, y=100, touched=False))
print(events[0].type)  # GestureType.RIGHT_SWIPE
```

```python
from deskpet.system_status import SystemStatus, wifi_line, brief_sentence2

status = SystemStatus()
status.wifi.connected = True
status.wifi.rssi = -52
print(wifi_line(status))        # Online -52 dBm
print(brief_sentence2(status))
```

```python
from deskpet.xiaozhi_protocol import parse_websocket_url

print(parse_websocket_url("wss://example.com:8443/xiaozhi/v1/"))
# WebSocketEndpoint(host='example.com', port=8443, path='/xiaozhi/v1/', use_ssl=True)
```

## What this package does not do

- It plays no audio. It finds tracks and reads WAV headers, but there is no player.
- It does not keep a live voice session. It builds and parses the messages, but it does not open a WebSocket, stream audio or dispatch MCP tool calls.
- It holds no shared screen or emotion state and no event hub.
- It has no command-line program.

## Running the tests

```
pytest
```