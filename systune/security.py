"""Firewall control through ufw."""

from __future__ import annotations

from systune.command import CommandRunner

SERVICES = ("ssh", "smtp", "vnc")


def ufw_command(rule: str | int, allowed: bool) -> str:
    """Build the privileged ufw command that allows or denies ``rule``."""
    action = "allow" if allowed else "deny"
    return f"pkexec ufw {action} {rule}"


class Firewall:
    """Turns the firewall on and off and opens or closes services and ports."""

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner if runner is not None else CommandRunner()

    def enable(self) -> str:
        return self.runner.run("pkexec ufw enable")

    def disable(self) -> str:
        return self.runner.run("pkexec ufw disable")

    def set_enabled(self, enabled: bool) -> str:
        return self.enable() if enabled else self.disable()

    def set_service(self, service: str, allowed: bool) -> str:
        if service not in SERVICES:
            raise ValueError(f"unknown service {service!r}")
        return self.runner.run(ufw_command(service, allowed))

    def set_port(self, port: str | int, allowed: bool) -> str:
        text = str(port)
        if not text:
            raise ValueError("a port must not be empty")
        return self.runner.run(ufw_command(text, allowed))