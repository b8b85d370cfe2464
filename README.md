# systune

systune reads and changes the everyday settings of a Linux desktop by
calling the standard command-line tools:

- **Audio** (`systune.audio`): volume of the default output and input, the
  list of output and input devices, and which one is the default (`pactl`).
- **Display** (`systune.display`): screen brightness (`brightnessctl`),
  resolution and refresh rate (`xrandr` in an X11 session; `wlr-randr`, or
  `hyprctl` when `DESKTOP_SESSION` is `hyprland`, in a Wayland session), and
  the wallpaper (`feh` on X11, `swww` on Wayland).
- **Wi-Fi** (`systune.wifi`): radio on/off, scanning, the current network
  and joining a network (`nmcli`).
- **Bluetooth** (`systune.bluetooth`): power, discoverability, discovery,
  the device list with connection state, connect, disconnect, pair and
  remove (`bluetoothctl`).
- **Firewall** (`systune.security`): enable or disable `ufw` and allow or
  deny the `ssh`, `smtp` and `vnc` services or a port, through `pkexec`.
- **Autostart** (`systune.autostart`): a managed `autostart.sh` script in
  `~/.config/hypr`, hooked into `hyprland.conf`.

Only the tools for the settings you use need to be installed. The package
itself has no dependencies beyond the standard library.

## Installing

```
pip install .
```

## From the command line

Installing the package provides the `systune` command. Each settings page
is a sub-command; with no sub-command the display page is shown.

```
systune --help
systune audio --volume 40
systune display --brightness 70
systune wifi --no-scan
systune bluetooth --on
systune security --firewall on --allow ssh --deny 8080
systune autostart --add nm-applet --name "Network applet"
```

- `audio`: `--volume`, `--mic-volume`, `--output POSITION`,
  `--input POSITION`; then prints the volumes and numbered device lists.
- `display`: `--brightness`, `--mode POSITION`, `--wallpaper PATH`; then
  prints the brightness and the numbered modes, the current one first.
- `wifi`: `--on` / `--off`, `--connect SSID` (with `--password` to be asked
  for the network's password), `--no-scan`.
- `bluetooth`: `--on` / `--off`, `--discoverable on|off`, `--scan`,
  `--stop-scan`, `--connect`, `--disconnect`, `--pair`, `--remove ADDRESS`.
- `security`: `--firewall on|off`, `--allow RULE`, `--deny RULE` (repeatable).
- `autostart`: `--config-dir`, `--add COMMAND` with `--name` and
  `--description`, `--add-executable PATH`, `--remove COMMAND`; then lists
  the entries.

The command returns 0 on success and 1, with a message on standard error,
when a tool cannot be run or its output cannot be understood.

## From Python

Every setting is a small object built around a `CommandRunner`, which runs
a shell command and returns at most `limit` bytes of its output
(`run`), or runs it and returns the exit status (`spawn`). A command that
cannot be started raises `CommandError`.

```python
import os

from systune.command import CommandRunner
from systune.audio import AudioControl
from systune.display import DisplayControl
from systune.wifi import WifiControl
from systune.bluetooth import BluetoothControl
from systune.security import Firewall

runner = CommandRunner(limit=4096)

audio = AudioControl(runner)
print("speaker volume:", audio.sink_volume())
audio.set_sink_volume(40)
for device in audio.sinks():
    print(device.index, device.description)

display = DisplayControl(runner, environ=os.environ)
print("brightness:", display.brightness())
modes = display.resolutions()
print(modes.labels())
display.set_mode(modes.select(0))

wifi = WifiControl(runner)
if wifi.is_enabled():
    for network in wifi.scan():
        print(network.ssid, network.subtitle(), network.icon_name())
print("current:", wifi.current_network())

bluetooth = BluetoothControl(runner)
print("powered:", bluetooth.is_powered())
for device in bluetooth.devices():
    print(device.name, device.address, device.subtitle)

firewall = Firewall(runner)
firewall.set_service("ssh", allowed=True)
firewall.set_port("8080", allowed=False)
```

The parsers used by these objects are plain functions that can be called on
captured output: `parse_volume` and `parse_devices` in `systune.audio`;
`parse_brightness`, `parse_xrandr` and `parse_wlr_randr` in
`systune.display`; `parse_networks`, `parse_current_network`, `parse_radio`
and `connect_command` in `systune.wifi`; `parse_devices`,
`parse_device_name` and `parse_powered` in `systune.bluetooth`; and
`ufw_command` in `systune.security`.

### Autostart entries

`AutostartManager` keeps a shell script of commands to start at login and
makes sure `hyprland.conf` runs it:

```python
from pathlib import Path

from systune.autostart import AutostartManager

manager = AutostartManager(Path.home() / ".config" / "hypr")
manager.setup()
app = manager.add_custom("nm-applet", name="Network applet", description="Tray icon")
manager.set_enabled(app, False)
for entry in manager.entries():
    print(entry.name, entry.command)
```

## What it does not do

systune is a command-line tool and a library; it has no graphical window.
The `default-apps`, `user-permissions`, `keyboard-shortcuts` and `config`
pages exist only as names: choosing one reports that it has no settings.

## Running the tests

```
pip install .[test]
pytest
```