import pytest

from systune.display import (
    DisplayControl,
    DisplayMode,
    ModeList,
    parse_brightness,
    parse_wlr_randr,
    parse_xrandr,
)

BRIGHTNESS_OUTPUT = (
    "Device 'intel_backlight' of class 'backlight':\n"
    "\tCurrent brightness: 19200 (40%)\n"
    "\tMax brightness: 48000\n"
)

XRANDR_OUTPUT = (
    "Screen 0: minimum 320 x 200, current 1920 x 1080, maximum 16384 x 16384\n"
    "eDP-1 connected primary 1920x1080+0+0 (normal left inverted right x axis y axis)"
    " 344mm x 193mm\n"
    "   1920x1080     60.02*+  60.01    59.97\n"
    "   1680x1050     59.95\n"
    "   1280x1024     60.02\n"
)

WLR_OUTPUT = (
    'eDP-1 "Panel (eDP-1)"\n'
    "  Enabled: yes\n"
    "  Modes:\n"
    "    1920x1200 px, 60.026001 Hz (preferred, current)\n"
    "    1280x800 px, 59.810001 Hz\n"
)


class FakeRunner:
    def __init__(self, output=""):
        self.output = output
        self.commands = []

    def run(self, command):
        self.commands.append(command)
        return self.output

    def spawn(self, command):
        self.commands.append(command)
        return 0


def test_parse_brightness_reads_percentage():
    assert parse_brightness(BRIGHTNESS_OUTPUT) == 40


def test_parse_brightness_without_line_raises():
    with pytest.raises(ValueError):
        parse_brightness("Max brightness: 48000\n")


def test_parse_xrandr_separates_current_mode():
    modes = parse_xrandr(XRANDR_OUTPUT)
    assert modes.current == DisplayMode("1920x1080", 60.02)
    assert [m.resolution for m in modes.modes] == ["1680x1050", "1280x1024"]
    assert modes.modes[0].refresh_rate == 59.95


def test_parse_wlr_randr_separates_current_mode():
    modes = parse_wlr_randr(WLR_OUTPUT)
    assert modes.current.resolution == "1920x1200"
    assert [m.resolution for m in modes.modes] == ["1280x800"]


def test_labels_put_current_first():
    modes = parse_xrandr(XRANDR_OUTPUT)
    labels = modes.labels()
    assert labels[0] == "1920x1080@60Hz"
    assert len(labels) == len(modes.modes) + 1
    assert labels[1:] == [m.label() for m in modes.modes]


def test_select_follows_label_order():
    modes = parse_xrandr(XRANDR_OUTPUT)
    assert modes.select(0) == modes.current
    assert modes.select(1) == modes.modes[0]
    assert modes.select(len(modes.modes)) == modes.modes[-1]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_select_out_of_range_raises(index):
    with pytest.raises(IndexError):
        parse_xrandr(XRANDR_OUTPUT).select(index)


def test_empty_mode_list_has_only_current():
    assert len(ModeList().labels()) == 1


def test_brightness_and_set_brightness():
    runner = FakeRunner(BRIGHTNESS_OUTPUT)
    control = DisplayControl(runner, {})
    assert control.brightness() == 40
    assert control.set_brightness(55.4) == 0
    assert runner.commands == ["brightnessctl", "brightnessctl set 55%"]


def test_resolutions_pick_tool_by_session():
    wayland_runner = FakeRunner(WLR_OUTPUT)
    wayland = DisplayControl(wayland_runner, {"XDG_SESSION_TYPE": "wayland"})
    assert wayland.resolutions() == parse_wlr_randr(WLR_OUTPUT)
    assert wayland_runner.commands == ["wlr-randr"]

    x11_runner = FakeRunner(XRANDR_OUTPUT)
    x11 = DisplayControl(x11_runner, {"XDG_SESSION_TYPE": "x11"})
    assert x11.resolutions() == parse_xrandr(XRANDR_OUTPUT)
    assert x11_runner.commands == ["xrandr"]


@pytest.mark.parametrize("environ", [{}, {"XDG_SESSION_TYPE": "tty"}])
def test_resolutions_unknown_session_raises(environ):
    with pytest.raises(RuntimeError):
        DisplayControl(FakeRunner(), environ).resolutions()


def test_mode_command_per_session():
    mode = DisplayMode("1920x1080", 60.02)
    hypr = DisplayControl(
        FakeRunner(), {"XDG_SESSION_TYPE": "wayland", "DESKTOP_SESSION": "hyprland"}
    )
    assert hypr.mode_command(mode) == "hyprctl keyword monitor ,1920x1080@60,0x0,1"
    other = DisplayControl(FakeRunner(), {"XDG_SESSION_TYPE": "wayland"})
    assert other.mode_command(mode) == "wlr-randr --output eDP-1 --mode 1920x1080"
    x11 = DisplayControl(FakeRunner(), {"XDG_SESSION_TYPE": "x11"})
    assert x11.mode_command(mode) == "xrandr -s 1920x1080"


def test_set_mode_runs_mode_command():
    runner = FakeRunner()
    control = DisplayControl(runner, {"XDG_SESSION_TYPE": "x11"})
    mode = DisplayMode("1280x1024", 60.02)
    control.set_mode(mode)
    assert runner.commands == [control.mode_command(mode)]


def test_wallpaper_command_per_session():
    wayland = DisplayControl(FakeRunner(), {"XDG_SESSION_TYPE": "wayland"})
    assert wayland.wallpaper_command("/tmp/bg.png") == "swww img /tmp/bg.png"
    x11 = DisplayControl(FakeRunner(), {"XDG_SESSION_TYPE": "x11"})
    assert x11.wallpaper_command("/tmp/bg.png") == "feh --bg-scale /tmp/bg.png"


def test_set_wallpaper_quotes_path_with_spaces():
    runner = FakeRunner()
    control = DisplayControl(runner, {"XDG_SESSION_TYPE": "x11"})
    control.set_wallpaper("/tmp/my bg.png")
    assert runner.commands == ["feh --bg-scale '/tmp/my bg.png'"]