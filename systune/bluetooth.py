"""Bluetooth power, discovery and device control through bluetoothctl."""

from __future__ import annotations

import re
import shlex
from dataclasses import dataclass

from systune.command import CommandRunner

STATUS_COMMAND = "bluetoothctl show | grep Powered"
DEVICES_COMMAND = "bluetoothctl devices"
SCAN_ON_COMMAND = "bluetoothctl scan on &"
SCAN_OFF_COMMAND = "bluetoothctl scan off"

POWERED_MARKER = "Powered: yes"
CONNECTED_MARKER = "Connected: yes"
CONNECT_SUCCESS = "Connection successful"
DISCONNECT_SUCCESS = "Successful disconnected"
PAIR_SUCCESS = "Pairing successful"
REMOVE_SUCCESS = "Device has been removed"
NAME_PREFIX = "Name: "

CONNECTED_SUBTITLE = "Connected"
AVAILABLE_SUBTITLE = "Available"

_SWITCH_WORDS = {True: "on", False: "off"}

_DEVICE_RE = re.compile(r"Device\s*(\S{1,17})\s*([^\n]+)")


@dataclass
class BluetoothDevice:
    """A device known to the Bluetooth controller."""

    address: str
    name: str
    is_connected: bool = False

    @property
    def subtitle(self) -> str:
        return CONNECTED_SUBTITLE if self.is_connected else AVAILABLE_SUBTITLE


def parse_devices(output: str) -> list[BluetoothDevice]:
    """Parse ``Device <address> <name>`` lines from ``bluetoothctl devices``."""
    devices = []
    for line in output.split("\n"):
        match = _DEVICE_RE.match(line)
        if match:
            devices.append(BluetoothDevice(match.group(1), match.group(2)))
    return devices


def parse_device_name(output: str) -> str | None:
    """Return the name from ``bluetoothctl info`` output, if one is reported."""
    start = output.find(NAME_PREFIX)
    if start < 0:
        return None
    start += len(NAME_PREFIX)
    end = output.find("\n", start)
    if end < 0:
        return None
    return output[start:end]


def parse_powered(output: str) -> bool:
    """Tell whether the controller reported itself as powered."""
    return POWERED_MARKER in output


class BluetoothControl:
    """Reads and changes the controller state and manages devices."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner if runner is not None else CommandRunner()

    def _device_command(self, action: str, address: str) -> str:
        return f"bluetoothctl {action} {shlex.quote(address)}"

    def _device_action(self, action: str, address: str, marker: str) -> bool:
        return marker in self.runner.run(self._device_command(action, address))

    def is_powered(self) -> bool:
        return parse_powered(self.runner.run(STATUS_COMMAND))

    def set_powered(self, enable: bool) -> int:
        """Switch the controller on or off; returns the exit status."""
        return self.runner.spawn(f"bluetoothctl power {_SWITCH_WORDS[bool(enable)]}")

    def set_discoverable(self, enable: bool) -> int:
        """Make the controller visible or hidden; returns the exit status."""
        return self.runner.spawn(
            f"bluetoothctl discoverable {_SWITCH_WORDS[bool(enable)]}"
        )

    def start_scan(self) -> int:
        """Start discovery in the background; returns the shell's exit status."""
        return self.runner.spawn(SCAN_ON_COMMAND)

    def stop_scan(self) -> int:
        return self.runner.spawn(SCAN_OFF_COMMAND)

    def devices(self) -> list[BluetoothDevice]:
        """List known devices together with their connection state."""
        found = parse_devices(self.runner.run(DEVICES_COMMAND))
        for device in found:
            device.is_connected = self.is_connected(device.address)
        return found

    def is_connected(self, address: str) -> bool:
        return self._device_action("info", address, CONNECTED_MARKER)

    def connect(self, address: str) -> bool:
        return self._device_action("connect", address, CONNECT_SUCCESS)

    def disconnect(self, address: str) -> bool:
        return self._device_action("disconnect", address, DISCONNECT_SUCCESS)

    def toggle(self, device: BluetoothDevice) -> bool:
        """Connect a disconnected device or disconnect a connected one.

        The device's state is updated when the operation succeeds; the
        return value tells whether it did.
        """
        if device.is_connected:
            if self.disconnect(device.address):
                device.is_connected = False
                return True
            return False
        if self.connect(device.address):
            device.is_connected = True
            return True
        return False

    def device_name(self, address: str) -> str | None:
        return parse_device_name(self.runner.run(self._device_command("info", address)))

    def pair(self, address: str) -> bool:
        return self._device_action("pair", address, PAIR_SUCCESS)

    def remove(self, address: str) -> bool:
        return self._device_action("remove", address, REMOVE_SUCCESS)