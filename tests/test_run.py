import subprocess
import sys
from pathlib import Path

import pytest

from backrooms.config import DEFAULT_CONFIG, FAST_CONFIG, PRESETS, WIDE_CONFIG, ViewerConfig
from backrooms.maps import DEMO_MAP
from backrooms.raycast.world import ArrayWorld
from backrooms.run import build_config, build_parser, load_world, main


def test_presets():
    assert PRESETS["default"] is DEFAULT_CONFIG
    assert FAST_CONFIG.n_rays < DEFAULT_CONFIG.n_rays < WIDE_CONFIG.n_rays
    assert WIDE_CONFIG.projection_plane_width > DEFAULT_CONFIG.projection_plane_width


def test_to_camera_params():
    config = ViewerConfig(n_rays=7, max_dist=9.0, projection_plane_width=1.5)
    params = config.to_camera_params((1.5, 2.5), (0.0, 1.0))

    assert params.pos == (1.5, 2.5)
    assert params.facing_unit == (0.0, 1.0)
    assert params.n_rays == 7
    assert params.max_dist == 9.0
    assert params.projection_plane_width == 1.5


def test_build_config_overrides_preset():
    args = build_parser().parse_args([
        "--preset", "fast", "--rays", "33", "--plane-width", "0.9", "--no-numba",
    ])
    config = build_config(args)

    assert config.n_rays == 33
    assert config.projection_plane_width == 0.9
    assert config.max_dist == FAST_CONFIG.max_dist
    assert config.use_numba is False
    # Presets are not modified
    assert FAST_CONFIG.n_rays == 80
    assert FAST_CONFIG.use_numba is True


def test_load_world_defaults_to_demo_map():
    world = load_world(ViewerConfig())
    assert world.to_ascii() == ArrayWorld.from_ascii(DEMO_MAP).to_ascii()


def test_main_missing_map(tmp_path, capsys):
    assert main(["--map", str(tmp_path / "nope.txt")]) == 1
    assert "ERROR: Map file not found" in capsys.readouterr().out


def test_main_ascii_frame(tmp_path, capsys):
    path = tmp_path / "room.txt"
    path.write_text("#####\n#...#\n#...#\n#...#\n#####\n")

    assert main(["--map", str(path), "--ascii", "--rays", "20"]) == 0

    out = capsys.readouterr().out
    assert "[Backrooms] Loaded ArrayWorld(5x5" in out
    frame = out.split("\n", 1)[1]
    assert any(char in frame for char in ".:-=+*#")


def test_parser_rejects_unknown_preset():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--preset", "huge"])


def test_ascii_frame_does_not_import_pygame(tmp_path):
    path = tmp_path / "room.txt"
    path.write_text("#####\n#...#\n#...#\n#...#\n#####\n")

    code = (
        "import sys\n"
        "from backrooms.run import main\n"
        f"main(['--map', {str(path)!r}, '--ascii', '--rays', '10'])\n"
        "assert 'pygame' not in sys.modules\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", code],
        capture_output=True,
        text=True,
        cwd=Path(__file__).resolve().parent.parent,
    )

    assert result.returncode == 0, result.stderr
    assert "pygame" not in result.stdout
