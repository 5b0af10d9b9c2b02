from unittest import mock

import pygame
import pytest

from babalong.app import (
    DEFAULT_ASSET_DIR,
    UsageError,
    main,
    parse_args,
    run_game,
    translate_key,
)
from babalong.game import Key
from babalong.textures import MANDATORY_SHEETS

WIN_MAP = "11111\n1PCE1\n11111\n"


def _write_xpm(path, width, height):
    rows = ",\n".join('"' + "a" * width + '"' for _ in range(height))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "/* XPM */\n"
        "static char *sheet[] = {\n"
        f'"{width} {height} 1 1",\n'
        '"a c #FF0000",\n'
        f"{rows}\n"
        "};\n"
    )


def test_parse_args_single_map():
    options = parse_args(["maps/a.ber"])
    assert options.map_path == "maps/a.ber"
    assert options.bonus is False
    assert options.asset_dir == DEFAULT_ASSET_DIR


def test_parse_args_with_options():
    options = parse_args(["--bonus", "m.ber", "--assets", "art"])
    assert (options.map_path, options.bonus, options.asset_dir) == (
        "m.ber", True, "art")


@pytest.mark.parametrize("argv", [[], ["a.ber", "b.ber"], ["--unknown", "a.ber"]])
def test_parse_args_rejects_bad_command_lines(argv):
    with pytest.raises(UsageError):
        parse_args(argv)


@pytest.mark.parametrize("pg_key, expected", [
    (pygame.K_w, Key.W),
    (pygame.K_a, Key.A),
    (pygame.K_s, Key.S),
    (pygame.K_d, Key.D),
    (pygame.K_ESCAPE, Key.ESC),
])
def test_translate_key_known(pg_key, expected):
    assert translate_key(pg_key) == expected


def test_translate_key_unknown():
    assert translate_key(pygame.K_q) is None


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")
    assert "Usage" in err


def test_run_game_missing_file(tmp_path, capsys):
    assert run_game(tmp_path / "missing.ber") == 1
    assert "Error opening map file" in capsys.readouterr().err


def test_run_game_invalid_map(tmp_path, capsys):
    path = tmp_path / "bad.ber"
    path.write_text("11111\n1PC1\n11111\n")
    assert run_game(path) == 1
    assert "Map is not rectangular." in capsys.readouterr().err


def test_main_reports_empty_map(tmp_path, capsys):
    path = tmp_path / "empty.ber"
    path.write_text("")
    assert main([str(path)]) == 1
    assert "Map file is empty." in capsys.readouterr().err


def test_run_game_missing_assets(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    path = tmp_path / "map.ber"
    path.write_text(WIN_MAP)
    assert run_game(path, False, tmp_path / "no-assets") == 1
    assert "Failed to load texture" in capsys.readouterr().err


def test_run_game_plays_to_a_win(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    assets = tmp_path / "assets"
    for name in MANDATORY_SHEETS:
        _write_xpm(assets / name, 400, 25)
    path = tmp_path / "map.ber"
    path.write_text(WIN_MAP)
    right = pygame.event.Event(pygame.KEYUP, key=pygame.K_d)
    with mock.patch("pygame.event.get", side_effect=[[right], [right]]):
        status = run_game(path, False, assets)
    assert status == 0
    out = capsys.readouterr().out
    assert "Move count: 1" in out
    assert "You Win!\nTotal moves: 2" in out


def test_run_game_escape_exits_cleanly(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    assets = tmp_path / "assets"
    for name in MANDATORY_SHEETS:
        _write_xpm(assets / name, 400, 25)
    path = tmp_path / "map.ber"
    path.write_text(WIN_MAP)
    esc = pygame.event.Event(pygame.KEYUP, key=pygame.K_ESCAPE)
    with mock.patch("pygame.event.get", side_effect=[[esc]]):
        status = run_game(path, False, assets)
    assert status == 0
    assert "Move count" not in capsys.readouterr().out