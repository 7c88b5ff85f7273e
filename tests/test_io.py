import h5py
import numpy as np
import pytest

from spirodesign.model.errors import GearConfigurationError
from spirodesign.model.io import FILE_FORMAT, IOManager


@pytest.fixture
def drawn(simulation):
    simulation.change_speed(0.003)
    simulation.start()
    simulation.advance(100)
    simulation.change_pen_color("#ff8800")
    simulation.change_pen_size_preset("Large")
    simulation.advance(60)
    simulation.stop()
    return simulation


def test_round_trip(drawn, tmp_path):
    path = tmp_path / "design.h5"
    snapshot = drawn.snapshot()

    IOManager.save_snapshot(snapshot, str(path))
    loaded = IOManager.load_snapshot(str(path))

    assert loaded.spur == snapshot.spur
    assert loaded.pinion == snapshot.pinion
    assert loaded.pen == snapshot.pen
    assert loaded.theta == snapshot.theta
    assert loaded.speed == snapshot.speed
    assert loaded.elapsed_ms == 160
    assert [s.style for s in loaded.segments] == [("#000000", 2.0), ("#ff8800", 4.0)]
    for got, expected in zip(loaded.segments, snapshot.segments):
        np.testing.assert_allclose(got.as_array(), expected.as_array())


def test_file_layout(drawn, tmp_path):
    path = tmp_path / "design.h5"
    IOManager.save_snapshot(drawn.snapshot(), str(path))

    with h5py.File(path, "r") as f:
        assert f.attrs["format"] == FILE_FORMAT
        assert "version" in f.attrs
        for name in ("spur", "pinion", "pen", "kinematics", "locus"):
            assert name in f
        dset = f["locus/segment_0001"]
        assert dset.shape[1] == 2
        assert dset.attrs["color"] == "#ff8800"

    assert not (tmp_path / "design.h5.tmp").exists()


def test_empty_locus_round_trip(simulation, tmp_path):
    path = tmp_path / "empty.h5"
    IOManager.save_snapshot(simulation.snapshot(), str(path))
    loaded = IOManager.load_snapshot(str(path))
    assert len(loaded.segments) == 1
    assert loaded.segments[0].is_empty()


def test_load_into_restores_simulation(drawn, simulation, tmp_path):
    path = tmp_path / "design.h5"
    IOManager.save_snapshot(drawn.snapshot(), str(path))
    expected = drawn.snapshot()

    simulation.reset_gears()
    IOManager.load_into(simulation, str(path))

    assert simulation.snapshot() == expected
    assert not simulation.is_running


def test_non_hdf5_file_is_rejected(simulation, tmp_path):
    path = tmp_path / "notes.h5"
    path.write_text("not a design")
    before = simulation.state

    with pytest.raises(ValueError):
        IOManager.load_snapshot(str(path))
    with pytest.raises(ValueError):
        IOManager.load_into(simulation, str(path))
    assert simulation.state is before


def test_missing_group_is_rejected(tmp_path):
    path = tmp_path / "partial.h5"
    with h5py.File(path, "w") as f:
        f.attrs["format"] = FILE_FORMAT
        f.create_group("spur")

    with pytest.raises(ValueError, match="missing"):
        IOManager.load_snapshot(str(path))


def test_invalid_geometry_is_rejected(simulation, tmp_path):
    path = tmp_path / "design.h5"
    IOManager.save_snapshot(simulation.snapshot(), str(path))
    with h5py.File(path, "a") as f:
        f["pinion"].attrs["radius"] = 250.0

    before = simulation.snapshot()
    with pytest.raises(GearConfigurationError):
        IOManager.load_into(simulation, str(path))
    assert simulation.snapshot() == before
