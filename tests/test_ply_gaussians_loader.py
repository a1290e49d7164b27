from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

plyfile = pytest.importorskip("plyfile")

from splatloader.io.ply import SH_C0, load_ply_gaussians  # noqa: E402


GAUSSIAN_PROPS = [
    ("x", "f4"),
    ("y", "f4"),
    ("z", "f4"),
    ("f_dc_0", "f4"),
    ("f_dc_1", "f4"),
    ("f_dc_2", "f4"),
    ("opacity", "f4"),
    ("scale_0", "f4"),
    ("scale_1", "f4"),
    ("scale_2", "f4"),
    ("rot_0", "f4"),
    ("rot_1", "f4"),
    ("rot_2", "f4"),
    ("rot_3", "f4"),
]


def _write_ply(path: Path, props: list[tuple[str, str]], rows: list[tuple], *, text: bool = False) -> Path:
    v = np.array(rows, dtype=props)
    el = plyfile.PlyElement.describe(v, "vertex")
    plyfile.PlyData([el], text=text).write(str(path))
    return path


def _gaussian_rows(n: int) -> list[tuple]:
    rows = []
    for i in range(n):
        rows.append((float(i), 0.0, 1.0, 0.0, 1.0, -1.0, 0.5, -2.0, -2.0, -2.0, 1.0, 0.0, 0.0, 0.0))
    return rows


def test_load_ply_gaussians_full_schema(tmp_path: Path) -> None:
    path = _write_ply(tmp_path / "gaussians.ply", GAUSSIAN_PROPS, _gaussian_rows(4))
    gs = load_ply_gaussians(path)

    assert gs.count == 4
    assert gs.positions.shape == (4, 3)
    assert gs.positions.dtype == np.float32
    assert gs.format == "ply"
    assert gs.source_path == str(path)

    assert gs.sh0 is not None and gs.sh0.shape == (4, 3)
    assert gs.opacity is not None and gs.opacity.shape == (4,)
    assert gs.scales is not None and gs.scales.shape == (4, 3)
    assert gs.rotations is not None and gs.rotations.shape == (4, 4)

    assert gs.colors_rgb8 is not None
    assert gs.colors_rgb8.dtype == np.uint8
    expected = np.clip(0.5 + SH_C0 * np.array([0.0, 1.0, -1.0]), 0.0, 1.0) * 255.0
    np.testing.assert_array_equal(gs.colors_rgb8[0], expected.astype(np.uint8))


@pytest.mark.parametrize("text", [True, False])
def test_plain_pointcloud_uses_vertex_colors(tmp_path: Path, text: bool) -> None:
    props = [("x", "f4"), ("y", "f4"), ("z", "f4"), ("red", "u1"), ("green", "u1"), ("blue", "u1")]
    rows = [(0.0, 0.0, 0.0, 255, 0, 0), (1.0, 0.0, 0.0, 0, 255, 0), (0.0, 1.0, 0.0, 0, 0, 255)]
    gs = load_ply_gaussians(_write_ply(tmp_path / "tri.ply", props, rows, text=text))

    assert gs.count == 3
    assert gs.sh0 is None
    assert gs.opacity is None
    assert gs.colors_rgb8 is not None
    np.testing.assert_array_equal(gs.colors_rgb8, np.array([[255, 0, 0], [0, 255, 0], [0, 0, 255]], dtype=np.uint8))


def test_positions_only(tmp_path: Path) -> None:
    props = [("x", "f4"), ("y", "f4"), ("z", "f4")]
    gs = load_ply_gaussians(_write_ply(tmp_path / "p.ply", props, [(1.0, 2.0, 3.0)]))
    assert gs.colors_rgb8 is None
    np.testing.assert_array_equal(gs.positions, [[1.0, 2.0, 3.0]])


def test_missing_coordinate_raises(tmp_path: Path) -> None:
    props = [("x", "f4"), ("y", "f4")]
    path = _write_ply(tmp_path / "bad.ply", props, [(1.0, 2.0)])
    with pytest.raises(ValueError, match="'z'"):
        load_ply_gaussians(path)


def test_missing_vertex_element_raises(tmp_path: Path) -> None:
    face = np.array([(0,)], dtype=[("idx", "i4")])
    path = tmp_path / "noverts.ply"
    plyfile.PlyData([plyfile.PlyElement.describe(face, "face")], text=True).write(str(path))
    with pytest.raises(ValueError, match="vertex"):
        load_ply_gaussians(path)
