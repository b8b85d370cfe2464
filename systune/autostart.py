"""Management of commands started with the Hyprland session."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

AUTOSTART_SCRIPT = "autostart.sh"
HYPRLAND_CONF = "hyprland.conf"
AUTOSTART_MARKER = "# Autostart script managed by autostart manager"
AUTOSTART_EXEC = "exec = ~/.config/hypr/autostart.sh"
SCRIPT_HEADER = "#!/bin/bash\n\n# Autostart entries will be added here\n"
CUSTOM_NAME = "Custom Command"


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "hypr"


def _basename(path: str) -> str:
    """Last path component, treating trailing slashes as insignificant."""
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


@dataclass
class AutostartApp:
    """A command listed in the autostart script."""

    name: str
    command: str
    description: str | None = None
    enabled: bool = True


class AutostartManager:
    """Keeps the autostart script and its hook in hyprland.conf."""

    def __init__(self, config_dir: str | os.PathLike[str] | None = None) -> None:
        self.config_dir = (
            Path(config_dir) if config_dir is not None else _default_config_dir()
        )

    @property
    def script_path(self) -> Path:
        return self.config_dir / AUTOSTART_SCRIPT

    @property
    def conf_path(self) -> Path:
        return self.config_dir / HYPRLAND_CONF

    def ensure_script(self) -> None:
        """Create the config directory and an executable script if missing."""
        self.config_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
        script = self.script_path
        if not script.exists():
            script.write_text(SCRIPT_HEADER)
            script.chmod(0o755)

    def ensure_conf_entry(self) -> None:
        """Append the line that runs the script to hyprland.conf if absent."""
        conf = self.conf_path
        if conf.exists():
            try:
                if AUTOSTART_MARKER in conf.read_text():
                    return
            except OSError:
                pass
        with conf.open("a") as handle:
            handle.write(f"\n{AUTOSTART_MARKER}\n{AUTOSTART_EXEC}\n")

    def setup(self) -> None:
        self.ensure_script()
        self.ensure_conf_entry()

    def add(self, command: str) -> None:
        """Append ``command`` to the script, run in the background."""
        with self.script_path.open("a") as handle:
            handle.write(f"{command} &\n")

    def remove(self, command: str) -> None:
        """Drop every script line that contains ``command``."""
        script = self.script_path
        if not script.exists():
            return
        lines = script.read_text().split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        kept = [line for line in lines if command not in line]
        script.write_text("".join(f"{line}\n" for line in kept))

    def set_enabled(self, app: AutostartApp, enabled: bool) -> None:
        if enabled:
            self.add(app.command)
        else:
            self.remove(app.command)
        app.enabled = enabled

    def add_executable(self, path: str | os.PathLike[str]) -> AutostartApp:
        """Start the program at ``path`` with the session."""
        command = os.fspath(path)
        app = AutostartApp(name=_basename(command), command=command)
        self.add(app.command)
        return app

    def add_custom(
        self, command: str, name: str | None = None, description: str | None = None
    ) -> AutostartApp:
        """Start an arbitrary shell command with the session."""
        if not command:
            raise ValueError("an autostart command must not be empty")
        app = AutostartApp(
            name=name if name else CUSTOM_NAME,
            command=command,
            description=description,
        )
        self.add(app.command)
        return app

    def entries(self) -> list[AutostartApp]:
        """List the commands currently in the script."""
        script = self.script_path
        if not script.exists():
            return []
        apps = []
        for line in script.read_text().split("\n"):
            if not line or line.startswith("#"):
                continue
            command = line
            if command.endswith("&"):
                command = command[:-1].strip()
            program = command.split(" ", 1)[0]
            apps.append(AutostartApp(name=_basename(program), command=command))
        return apps