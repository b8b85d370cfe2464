"""Command-line front end that opens the settings panels."""

from __future__ import annotations

import argparse
import getpass
import sys
from collections.abc import Callable, Sequence
from enum import Enum

from systune.audio import AudioControl
from systune.autostart import AutostartManager
from systune.bluetooth import BluetoothControl
from systune.command import CommandError
from systune.display import DisplayControl
from systune.security import SERVICES, Firewall
from systune.wifi import WifiControl


class Panel(Enum):
    """A settings page; the value is the page's name."""

    AUDIO = "audio_page"
    DISPLAY = "display_page"
    WIFI = "wifi_page"
    BLUETOOTH = "bluetooth_page"
    AUTOSTART = "autostart_page"
    SECURITY = "security_page"
    DEFAULT_APPS = "default_apps_page"
    USER_PERMISSIONS = "user_permissions_page"
    KEYBOARD_SHORTCUTS = "keyboard_shortcuts_page"
    CONFIG_FILES = "config_page"

    @property
    def page_name(self) -> str:
        return self.value

    @property
    def title(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def command(self) -> str:
        return _COMMANDS[self]


DEFAULT_PANEL = Panel.DISPLAY

_ROW_NAMES = {
    "audio_controls": Panel.AUDIO,
    "display_settings": Panel.DISPLAY,
    "wifi_options": Panel.WIFI,
    "bluetooth_options": Panel.BLUETOOTH,
    "autostart_apps": Panel.AUTOSTART,
    "security_settings": Panel.SECURITY,
    "default_apps": Panel.DEFAULT_APPS,
    "user_permissions": Panel.USER_PERMISSIONS,
    "keyboard_shortcuts": Panel.KEYBOARD_SHORTCUTS,
    "config_files": Panel.CONFIG_FILES,
}

_COMMANDS = {
    Panel.AUDIO: "audio",
    Panel.DISPLAY: "display",
    Panel.WIFI: "wifi",
    Panel.BLUETOOTH: "bluetooth",
    Panel.AUTOSTART: "autostart",
    Panel.SECURITY: "security",
    Panel.DEFAULT_APPS: "default-apps",
    Panel.USER_PERMISSIONS: "user-permissions",
    Panel.KEYBOARD_SHORTCUTS: "keyboard-shortcuts",
    Panel.CONFIG_FILES: "config",
}

_BY_COMMAND = {command: panel for panel, command in _COMMANDS.items()}


def panel_for(name: str) -> Panel | None:
    """Return the panel for a sidebar row name or a command name, if any."""
    return _ROW_NAMES.get(name) or _BY_COMMAND.get(name)


def _on_off(text: str) -> bool:
    return text == "on"


def _add_switch(parser: argparse.ArgumentParser, what: str) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--on", dest="power", action="store_const", const=True,
                       help=f"switch {what} on")
    group.add_argument("--off", dest="power", action="store_const", const=False,
                       help=f"switch {what} off")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per panel."""
    parser = argparse.ArgumentParser(
        prog="systune", description="Inspect and change system settings."
    )
    sub = parser.add_subparsers(dest="panel", metavar="PANEL")

    audio = sub.add_parser(Panel.AUDIO.command, help="volumes and audio devices")
    audio.add_argument("--volume", type=float, help="speaker volume in percent")
    audio.add_argument("--mic-volume", type=float, help="microphone volume in percent")
    audio.add_argument("--output", type=int, metavar="POSITION",
                       help="make the listed output device the default")
    audio.add_argument("--input", type=int, metavar="POSITION",
                       help="make the listed input device the default")

    display = sub.add_parser(Panel.DISPLAY.command,
                             help="brightness, resolution and wallpaper")
    display.add_argument("--brightness", type=float, help="brightness in percent")
    display.add_argument("--mode", type=int, metavar="POSITION",
                         help="switch to the listed display mode")
    display.add_argument("--wallpaper", metavar="PATH", help="set the background image")

    wifi = sub.add_parser(Panel.WIFI.command, help="Wi-Fi radio and networks")
    _add_switch(wifi, "the Wi-Fi radio")
    wifi.add_argument("--connect", metavar="SSID", help="join a network")
    wifi.add_argument("--password", dest="ask_secret", action="store_true",
                      help="ask for the network's password before joining")
    wifi.add_argument("--no-scan", dest="scan", action="store_false",
                      help="do not list networks in range")

    bluetooth = sub.add_parser(Panel.BLUETOOTH.command,
                               help="Bluetooth controller and devices")
    _add_switch(bluetooth, "the Bluetooth controller")
    bluetooth.add_argument("--discoverable", choices=("on", "off"),
                           help="make the controller visible or hidden")
    bluetooth.add_argument("--scan", action="store_true", help="start discovery")
    bluetooth.add_argument("--stop-scan", action="store_true", help="stop discovery")
    bluetooth.add_argument("--connect", metavar="ADDRESS", help="connect a device")
    bluetooth.add_argument("--disconnect", metavar="ADDRESS",
                           help="disconnect a device")
    bluetooth.add_argument("--pair", metavar="ADDRESS", help="pair with a device")
    bluetooth.add_argument("--remove", metavar="ADDRESS", help="forget a device")

    autostart = sub.add_parser(Panel.AUTOSTART.command,
                               help="commands started with the session")
    autostart.add_argument("--config-dir", metavar="DIR",
                           help="directory holding autostart.sh and hyprland.conf")
    autostart.add_argument("--add", metavar="COMMAND", help="add a custom command")
    autostart.add_argument("--name", help="name of the custom command")
    autostart.add_argument("--description", help="description of the custom command")
    autostart.add_argument("--add-executable", metavar="PATH",
                           help="start a program with the session")
    autostart.add_argument("--remove", metavar="COMMAND",
                           help="stop starting a command with the session")

    security = sub.add_parser(Panel.SECURITY.command, help="firewall rules")
    security.add_argument("--firewall", choices=("on", "off"),
                          help="enable or disable the firewall")
    security.add_argument("--allow", action="append", default=[], metavar="RULE",
                          help=f"allow a service ({', '.join(SERVICES)}) or a port")
    security.add_argument("--deny", action="append", default=[], metavar="RULE",
                          help=f"deny a service ({', '.join(SERVICES)}) or a port")

    for panel in (Panel.DEFAULT_APPS, Panel.USER_PERMISSIONS,
                  Panel.KEYBOARD_SHORTCUTS, Panel.CONFIG_FILES):
        sub.add_parser(panel.command, help=panel.title.lower())

    return parser


def _pick(items: Sequence, position: int, what: str):
    if not 0 <= position < len(items):
        raise IndexError(f"no {what} at position {position}")
    return items[position]


def _run_audio(args: argparse.Namespace) -> None:
    control = AudioControl()
    if args.volume is not None:
        control.set_sink_volume(args.volume)
    if args.mic_volume is not None:
        control.set_source_volume(args.mic_volume)
    sinks = control.sinks()
    sources = control.sources()
    if args.output is not None:
        control.set_default_sink(_pick(sinks, args.output, "output device"))
    if args.input is not None:
        control.set_default_source(_pick(sources, args.input, "input device"))
    print(f"Speaker volume: {control.sink_volume()}%")
    print(f"Microphone volume: {control.source_volume()}%")
    print("Output devices:")
    for position, device in enumerate(sinks):
        print(f"  {position}: {device.description}")
    print("Input devices:")
    for position, device in enumerate(sources):
        print(f"  {position}: {device.description}")


def _run_display(args: argparse.Namespace) -> None:
    control = DisplayControl()
    if args.brightness is not None:
        control.set_brightness(args.brightness)
    if args.wallpaper:
        control.set_wallpaper(args.wallpaper)
    print(f"Brightness: {control.brightness()}%")
    modes = control.resolutions()
    if args.mode is not None:
        control.set_mode(modes.select(args.mode))
    print("Modes:")
    for position, label in enumerate(modes.labels()):
        print(f"  {position}: {label}")


def _run_wifi(args: argparse.Namespace) -> None:
    control = WifiControl()
    if args.power is not None:
        control.set_enabled(args.power)
    if args.connect:
        prompt = f"Password for {args.connect}: "
        password = getpass.getpass(prompt) if args.ask_secret else None
        output = control.connect(args.connect, password)
        if output:
            print(output.rstrip("\n"))
    print(f"Wi-Fi: {'on' if control.is_enabled() else 'off'}")
    current = control.current_network()
    print(f"Current network: {current}" if current else "Not Connected")
    if args.scan:
        for network in control.scan():
            print(f"  {network.ssid}\t{network.signal}%\t{network.subtitle()}")


def _run_bluetooth(args: argparse.Namespace) -> None:
    control = BluetoothControl()
    if args.power is not None:
        control.set_powered(args.power)
    if args.discoverable is not None:
        control.set_discoverable(_on_off(args.discoverable))
    if args.scan:
        control.start_scan()
    if args.stop_scan:
        control.stop_scan()
    actions: list[tuple[str | None, Callable[[str], bool], str]] = [
        (args.connect, control.connect, "connect"),
        (args.disconnect, control.disconnect, "disconnect"),
        (args.pair, control.pair, "pair"),
        (args.remove, control.remove, "remove"),
    ]
    for address, action, verb in actions:
        if address:
            outcome = "done" if action(address) else "failed"
            print(f"{verb} {address}: {outcome}")
    print(f"Bluetooth: {'on' if control.is_powered() else 'off'}")
    for device in control.devices():
        print(f"  {device.name}\t{device.address}\t{device.subtitle}")


def _run_autostart(args: argparse.Namespace) -> None:
    manager = AutostartManager(args.config_dir)
    manager.setup()
    if args.add is not None:
        manager.add_custom(args.add, args.name, args.description)
    if args.add_executable:
        manager.add_executable(args.add_executable)
    if args.remove:
        manager.remove(args.remove)
    for app in manager.entries():
        print(f"{app.name}\t{app.command}")


def _run_security(args: argparse.Namespace) -> None:
    firewall = Firewall()
    if args.firewall is not None:
        firewall.set_enabled(_on_off(args.firewall))
    for allowed, rules in ((True, args.allow), (False, args.deny)):
        for rule in rules:
            if rule in SERVICES:
                firewall.set_service(rule, allowed)
            else:
                firewall.set_port(rule, allowed)


def _run_static(args: argparse.Namespace) -> None:
    """Report a page that has no settings of its own."""
    panel = panel_for(args.panel)
    if panel is None:
        raise ValueError(f"unknown panel {args.panel!r}")
    print(f"{panel.title}: no settings are available on this page")


_HANDLERS: dict[Panel, Callable[[argparse.Namespace], None]] = {
    Panel.AUDIO: _run_audio,
    Panel.DISPLAY: _run_display,
    Panel.WIFI: _run_wifi,
    Panel.BLUETOOTH: _run_bluetooth,
    Panel.AUTOSTART: _run_autostart,
    Panel.SECURITY: _run_security,
    Panel.DEFAULT_APPS: _run_static,
    Panel.USER_PERMISSIONS: _run_static,
    Panel.KEYBOARD_SHORTCUTS: _run_static,
    Panel.CONFIG_FILES: _run_static,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one panel; the display panel is shown when none is named."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.panel is None:
        args = parser.parse_args([DEFAULT_PANEL.command])
    panel = panel_for(args.panel)
    if panel is None:
        parser.error(f"unknown panel {args.panel!r}")
    try:
        _HANDLERS[panel](args)
    except (CommandError, RuntimeError, ValueError, IndexError, OSError) as exc:
        print(f"systune: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())