"""Audio volume and device control through pactl."""

from __future__ import annotations

import re
from dataclasses import dataclass

from systune.command import CommandRunner

SINK_VOLUME_COMMAND = "pactl get-sink-volume @DEFAULT_SINK@"
SOURCE_VOLUME_COMMAND = "pactl get-source-volume @DEFAULT_SOURCE@"
SINKS_COMMAND = (
    "pactl list sinks | grep -E \"Sink #|Description:\" | "
    "awk '/Sink #/{idx=$2} /Description:/{print idx, $0}'"
)
SOURCES_COMMAND = (
    "pactl list sources | grep -E \"Source #|Description:\" | "
    "awk '/Source #/{idx=$2} /Description:/{print idx, $0}'"
)

_VOLUME_RE = re.compile(r"[^/]+/\s*([+-]?\d+)")
_DEVICE_RE = re.compile(r"#(\d+)\s*Description:\s*([^\n]+)")


@dataclass(frozen=True)
class AudioDevice:
    """A sink or source known to the sound server."""

    index: int
    description: str


def _first_line(output: str) -> str:
    return next((line for line in output.split("\n") if line), "")


def parse_volume(output: str) -> int:
    """Return the first channel's volume percentage from pactl output."""
    match = _VOLUME_RE.match(_first_line(output))
    if match is None:
        raise ValueError(f"no volume found in {output!r}")
    return int(match.group(1))


def parse_devices(output: str) -> list[AudioDevice]:
    """Parse ``#<index> Description: <text>`` lines into devices."""
    devices = []
    for line in output.split("\n"):
        match = _DEVICE_RE.match(line)
        if match:
            devices.append(AudioDevice(int(match.group(1)), match.group(2)))
    return devices


def _device_index(device: AudioDevice | int) -> int:
    return device.index if isinstance(device, AudioDevice) else int(device)


class AudioControl:
    """Reads and changes volumes and default devices."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner if runner is not None else CommandRunner()

    def sink_volume(self) -> int:
        return parse_volume(self.runner.run(SINK_VOLUME_COMMAND))

    def source_volume(self) -> int:
        return parse_volume(self.runner.run(SOURCE_VOLUME_COMMAND))

    def sinks(self) -> list[AudioDevice]:
        return parse_devices(self.runner.run(SINKS_COMMAND))

    def sources(self) -> list[AudioDevice]:
        return parse_devices(self.runner.run(SOURCES_COMMAND))

    def set_sink_volume(self, volume: float) -> int:
        """Set the default sink volume in percent; returns the exit status."""
        return self.runner.spawn(
            f"pactl set-sink-volume @DEFAULT_SINK@ {int(volume)}%"
        )

    def set_source_volume(self, volume: float) -> int:
        """Set the default source volume in percent; returns the exit status."""
        return self.runner.spawn(
            f"pactl set-source-volume @DEFAULT_SOURCE@ {int(volume)}%"
        )

    def set_default_sink(self, device: AudioDevice | int) -> str:
        return self.runner.run(f"pactl set-default-sink {_device_index(device)}")

    def set_default_source(self, device: AudioDevice | int) -> str:
        return self.runner.run(
            f"pactl set-default-source {_device_index(device)}"
        )