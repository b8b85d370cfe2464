"""Wi-Fi radio, scanning and connection control through nmcli."""

from __future__ import annotations

import re
from dataclasses import dataclass

from systune.command import CommandRunner

RADIO_COMMAND = "nmcli radio wifi"
RESCAN_COMMAND = "nmcli device wifi rescan"
LIST_COMMAND = "nmcli -t -f SSID,SIGNAL,SECURITY device wifi list"
CURRENT_COMMAND = "nmcli -t -f active,ssid dev wifi"

SECURED_SUBTITLE = "Secured with WPA"
OPEN_SUBTITLE = "Open Network"

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def signal_icon_name(signal_strength: int) -> str:
    """Return the symbolic icon name that matches a signal percentage."""
    if signal_strength > 80:
        return "network-wireless-signal-excellent-symbolic"
    if signal_strength > 55:
        return "network-wireless-signal-good-symbolic"
    if signal_strength > 30:
        return "network-wireless-signal-ok-symbolic"
    return "network-wireless-signal-weak-symbolic"


@dataclass(frozen=True)
class Network:
    """A wireless network seen during a scan."""

    ssid: str
    signal: int
    secured: bool

    def subtitle(self) -> str:
        return SECURED_SUBTITLE if self.secured else OPEN_SUBTITLE

    def icon_name(self) -> str:
        return signal_icon_name(self.signal)


def _leading_int(text: str) -> int:
    """Read a leading integer the way C's atoi does; 0 when there is none."""
    match = _LEADING_INT_RE.match(text)
    return int(match.group(1)) if match else 0


def parse_networks(output: str) -> list[Network]:
    """Parse terse ``SSID:SIGNAL:SECURITY`` lines; an empty line ends the list."""
    networks = []
    for line in output.split("\n"):
        if not line:
            break
        fields = line.split(":")
        if len(fields) < 3:
            continue
        ssid = fields[0]
        if ssid:
            networks.append(Network(ssid, _leading_int(fields[1]), bool(fields[2])))
    return networks


def parse_current_network(output: str) -> str | None:
    """Return the SSID of the active connection, or None when there is none."""
    for line in output.split("\n"):
        fields = line.split(":", 1)
        if len(fields) >= 2 and fields[0] == "yes":
            return fields[1]
    return None


def parse_radio(output: str) -> bool:
    """Tell whether ``nmcli radio wifi`` reported the radio as enabled."""
    return "enabled" in output


def _single_quote(text: str) -> str:
    return "'" + text.replace("'", "'\"'\"'") + "'"


def connect_command(ssid: str, password: str | None = None) -> str:
    """Build the nmcli command that joins ``ssid``."""
    if password is not None:
        return (
            f"nmcli dev wifi connect {_single_quote(ssid)} "
            f"password {_single_quote(password)} "
        )
    return f"nmcli device wifi connect {_single_quote(ssid)}"


class WifiControl:
    """Reads and changes the Wi-Fi radio state and connects to networks."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner if runner is not None else CommandRunner()

    def is_enabled(self) -> bool:
        return parse_radio(self.runner.run(RADIO_COMMAND))

    def set_enabled(self, enable: bool) -> int:
        """Switch the radio on or off; returns the exit status."""
        return self.runner.spawn(f"nmcli radio wifi {'on' if enable else 'off'}")

    def scan(self) -> list[Network]:
        """Rescan and list the networks in range."""
        self.runner.run(RESCAN_COMMAND)
        return parse_networks(self.runner.run(LIST_COMMAND))

    def current_network(self) -> str | None:
        return parse_current_network(self.runner.run(CURRENT_COMMAND))

    def connect(self, ssid: str, password: str | None = None) -> str:
        """Join ``ssid``; returns what nmcli printed."""
        return self.runner.run(connect_command(ssid, password))