"""Brightness, resolution and wallpaper control."""

from __future__ import annotations

import os
import re
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field

from systune.command import CommandRunner

_FLOAT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_FLOAT_RE = re.compile(_FLOAT)
_TOKEN_RE = re.compile(r"\S{1,31}")
_BRIGHTNESS_RE = re.compile(r"[^(]+\(\s*([+-]?\d+)")
_WLR_MODE_RE = re.compile(r"\s*([0-9x]{1,31})\s*px,\s*(" + _FLOAT + ")")


@dataclass(frozen=True)
class DisplayMode:
    """A resolution with its refresh rate."""

    resolution: str
    refresh_rate: float

    def label(self) -> str:
        return f"{self.resolution}@{int(self.refresh_rate)}Hz"


@dataclass
class ModeList:
    """The current mode followed by the other available modes."""

    current: DisplayMode = field(default_factory=lambda: DisplayMode("", 0.0))
    modes: list[DisplayMode] = field(default_factory=list)

    def labels(self) -> list[str]:
        return [self.current.label(), *(mode.label() for mode in self.modes)]

    def select(self, index: int) -> DisplayMode:
        """Return the mode at ``index`` in the order of :meth:`labels`."""
        if not 0 <= index <= len(self.modes):
            raise IndexError(f"no display mode at position {index}")
        return self.current if index == 0 else self.modes[index - 1]


def parse_brightness(output: str) -> int:
    """Return the brightness percentage reported by brightnessctl."""
    for line in output.split("\n"):
        if "Current brightness:" in line:
            match = _BRIGHTNESS_RE.match(line)
            if match:
                return int(match.group(1))
    raise ValueError(f"no brightness found in {output!r}")


def _scan_xrandr_mode(line: str) -> DisplayMode | None:
    rest = line.lstrip()
    token = _TOKEN_RE.match(rest)
    if token is None:
        return None
    rate = _FLOAT_RE.match(rest[token.end():].lstrip())
    if rate is None:
        return None
    return DisplayMode(token.group(), float(rate.group()))


def _scan_wlr_mode(line: str) -> DisplayMode | None:
    match = _WLR_MODE_RE.match(line)
    if match is None:
        return None
    return DisplayMode(match.group(1), float(match.group(2)))


def parse_xrandr(output: str) -> ModeList:
    """Collect modes from xrandr output; the starred one is current."""
    result = ModeList()
    for line in output.split("\n"):
        if "x" not in line or "." not in line:
            continue
        mode = _scan_xrandr_mode(line)
        if mode is None:
            continue
        if "*" in line:
            result.current = mode
        else:
            result.modes.append(mode)
    return result


def parse_wlr_randr(output: str) -> ModeList:
    """Collect modes from wlr-randr output; the one marked current is current."""
    result = ModeList()
    for line in output.split("\n"):
        if "px," not in line or "Hz" not in line:
            continue
        mode = _scan_wlr_mode(line)
        if mode is None:
            continue
        if "current" in line:
            result.current = mode
        else:
            result.modes.append(mode)
    return result


class DisplayControl:
    """Talks to the brightness, resolution and wallpaper tools of a session."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.runner = runner if runner is not None else CommandRunner()
        self.environ = environ if environ is not None else os.environ

    def _session(self) -> str:
        return self.environ.get("XDG_SESSION_TYPE", "").rstrip()

    def brightness(self) -> int:
        return parse_brightness(self.runner.run("brightnessctl"))

    def set_brightness(self, value: float) -> int:
        """Set the brightness in percent; returns the exit status."""
        return self.runner.spawn(f"brightnessctl set {value:.0f}%")

    def resolutions(self) -> ModeList:
        """List the modes available in the current session."""
        session = self.environ.get("XDG_SESSION_TYPE")
        if session is None:
            raise RuntimeError("XDG_SESSION_TYPE environment variable not set")
        if session == "wayland":
            return parse_wlr_randr(self.runner.run("wlr-randr"))
        if session == "x11":
            return parse_xrandr(self.runner.run("xrandr"))
        raise RuntimeError(f"unsupported session type: {session}")

    def mode_command(self, mode: DisplayMode) -> str:
        if self._session() == "wayland":
            desktop = self.environ.get("DESKTOP_SESSION", "").rstrip()
            if desktop == "hyprland":
                return (
                    f"hyprctl keyword monitor ,{mode.resolution}"
                    f"@{int(mode.refresh_rate)},0x0,1"
                )
            return f"wlr-randr --output eDP-1 --mode {mode.resolution}"
        return f"xrandr -s {mode.resolution}"

    def set_mode(self, mode: DisplayMode) -> str:
        return self.runner.run(self.mode_command(mode))

    def wallpaper_command(self, path: str | os.PathLike[str]) -> str:
        quoted = shlex.quote(os.fspath(path))
        if self._session() == "wayland":
            return f"swww img {quoted}"
        return f"feh --bg-scale {quoted}"

    def set_wallpaper(self, path: str | os.PathLike[str]) -> str:
        return self.runner.run(self.wallpaper_command(path))