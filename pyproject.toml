[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "systune"
version = "0.1.0"
description = "Settings for audio, display, Wi-Fi, Bluetooth, firewall and autostart on a Linux desktop, driven through the usual command-line tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "settings",
    "desktop",
    "pactl",
    "brightnessctl",
    "xrandr",
    "wlr-randr",
    "nmcli",
    "bluetoothctl",
    "ufw",
    "hyprland",
    "autostart",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
systune = "systune.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["systune"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
