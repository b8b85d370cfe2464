"""Desktop settings for audio, display, Wi-Fi, Bluetooth, firewall and autostart."""

__version__ = "0.1.0"

__all__ = ["__version__"]