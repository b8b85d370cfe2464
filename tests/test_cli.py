import pytest

from systune.autostart import AUTOSTART_EXEC, AUTOSTART_MARKER
from systune.cli import Panel, build_parser, main, panel_for


@pytest.mark.parametrize(
    "row, page",
    [
        ("audio_controls", "audio_page"),
        ("display_settings", "display_page"),
        ("wifi_options", "wifi_page"),
        ("bluetooth_options", "bluetooth_page"),
        ("autostart_apps", "autostart_page"),
        ("security_settings", "security_page"),
        ("default_apps", "default_apps_page"),
        ("user_permissions", "user_permissions_page"),
        ("keyboard_shortcuts", "keyboard_shortcuts_page"),
        ("config_files", "config_page"),
    ],
)
def test_panel_for_row_names(row, page):
    panel = panel_for(row)
    assert panel is not None
    assert panel.page_name == page


def test_panel_for_unknown_name():
    assert panel_for("no_such_row") is None


@pytest.mark.parametrize("panel", list(Panel))
def test_command_name_round_trip(panel):
    assert panel_for(panel.command) is panel


def test_parser_reads_display_options():
    args = build_parser().parse_args(["display", "--brightness", "40", "--mode", "2"])
    assert args.panel == "display"
    assert args.brightness == 40.0
    assert args.mode == 2


def test_parser_rejects_both_on_and_off():
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["wifi", "--on", "--off"])
    assert excinfo.value.code == 2


def test_parser_collects_repeated_rules():
    args = build_parser().parse_args(["security", "--allow", "ssh", "--allow", "8080"])
    assert args.allow == ["ssh", "8080"]
    assert args.deny == []


def test_main_rejects_unknown_panel():
    with pytest.raises(SystemExit) as excinfo:
        main(["nonsense"])
    assert excinfo.value.code == 2


@pytest.mark.parametrize(
    "command, title",
    [
        ("config", "Config Files"),
        ("default-apps", "Default Apps"),
        ("user-permissions", "User Permissions"),
        ("keyboard-shortcuts", "Keyboard Shortcuts"),
    ],
)
def test_static_panels(command, title, capsys):
    assert main([command]) == 0
    assert capsys.readouterr().out.startswith(title)


def test_autostart_sets_up_files(tmp_path, capsys):
    assert main(["autostart", "--config-dir", str(tmp_path)]) == 0
    assert capsys.readouterr().out == ""
    assert (tmp_path / "autostart.sh").exists()
    conf = (tmp_path / "hyprland.conf").read_text()
    assert AUTOSTART_MARKER in conf
    assert AUTOSTART_EXEC in conf


def test_autostart_add_and_remove(tmp_path, capsys):
    config = str(tmp_path)
    assert main(["autostart", "--config-dir", config, "--add", "waybar -c cfg"]) == 0
    out = capsys.readouterr().out
    assert "waybar\twaybar -c cfg" in out
    assert "waybar -c cfg &" in (tmp_path / "autostart.sh").read_text()

    assert main(["autostart", "--config-dir", config, "--remove", "waybar"]) == 0
    assert capsys.readouterr().out == ""
    assert "waybar" not in (tmp_path / "autostart.sh").read_text()


def test_autostart_add_executable(tmp_path, capsys):
    program = tmp_path / "bin" / "tool"
    assert main(["autostart", "--config-dir", str(tmp_path),
                 "--add-executable", str(program)]) == 0
    assert f"tool\t{program}" in capsys.readouterr().out


def test_autostart_setup_is_idempotent(tmp_path):
    main(["autostart", "--config-dir", str(tmp_path)])
    main(["autostart", "--config-dir", str(tmp_path)])
    conf = (tmp_path / "hyprland.conf").read_text()
    assert conf.count(AUTOSTART_MARKER) == 1


def test_autostart_empty_command_is_an_error(tmp_path, capsys):
    assert main(["autostart", "--config-dir", str(tmp_path), "--add", ""]) == 1
    assert capsys.readouterr().err.startswith("systune:")