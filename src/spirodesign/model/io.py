"""
Input/Output Manager (HDF5)
Handles saving and loading simulation snapshots to .h5 files.

Layout:
    /                attrs: version, format
    /spur            attrs: kind, center, radius, color
    /pinion          attrs: kind, center, radius, color
    /pen             attrs: position, size, color, alpha, reach
    /kinematics      attrs: theta, speed, elapsed_ms
    /locus/segment_0000 ...   (N, 2) float64 datasets, attrs: color, size
"""
from __future__ import annotations

import logging
import os
from importlib.metadata import version, PackageNotFoundError
from typing import TYPE_CHECKING

import h5py
import numpy as np

from spirodesign.model.gears import Gear, Pen
from spirodesign.model.locus import PathSegment
from spirodesign.model.state import SimulationSnapshot

if TYPE_CHECKING:
    from spirodesign.model.simulation import Simulation

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("spirodesign")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

FILE_FORMAT = "spirodesign-snapshot"
_REQUIRED_GROUPS = ("spur", "pinion", "pen", "kinematics", "locus")


class IOManager:

    @staticmethod
    def save_snapshot(snapshot: SimulationSnapshot, filepath: str) -> None:
        logger.info(f"Saving snapshot to: {filepath}")
        # Written to a sibling file, then moved over the target.
        tmp_path = f"{filepath}.tmp"
        try:
            with h5py.File(tmp_path, "w") as f:
                f.attrs["version"] = APP_VERSION
                f.attrs["format"] = FILE_FORMAT

                # --- 1. SAVE GEARS ---
                for name, gear in (("spur", snapshot.spur), ("pinion", snapshot.pinion)):
                    grp = f.create_group(name)
                    for key, val in gear.to_dict().items():
                        grp.attrs[key] = val

                # --- 2. SAVE PEN ---
                grp_pen = f.create_group("pen")
                for key, val in snapshot.pen.to_dict().items():
                    grp_pen.attrs[key] = val

                # --- 3. SAVE KINEMATICS ---
                grp_kin = f.create_group("kinematics")
                grp_kin.attrs["theta"] = snapshot.theta
                grp_kin.attrs["speed"] = snapshot.speed
                grp_kin.attrs["elapsed_ms"] = snapshot.elapsed_ms

                # --- 4. SAVE LOCUS ---
                grp_locus = f.create_group("locus")
                grp_locus.attrs["segment_count"] = len(snapshot.segments)
                for i, segment in enumerate(snapshot.segments):
                    # Chunked (compressed) datasets cannot be empty
                    dset = grp_locus.create_dataset(
                        f"segment_{i:04d}",
                        data=segment.as_array(),
                        compression="gzip" if len(segment) else None,
                    )
                    dset.attrs["color"] = segment.color
                    dset.attrs["size"] = segment.size

                logger.debug(
                    f"Wrote {len(snapshot.segments)} segments, "
                    f"{sum(len(s) for s in snapshot.segments)} points."
                )

            os.replace(tmp_path, filepath)
            logger.info(f"Snapshot saved to: {filepath}")

        except Exception as e:
            logger.exception(f"Failed to save snapshot: {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise e

    @staticmethod
    def load_snapshot(filepath: str) -> SimulationSnapshot:
        """
        Read a snapshot from `filepath`. Never touches live state.

        Raises:
            ValueError: If the file is not HDF5 or lacks a required group.
            GearConfigurationError: If the stored geometry is invalid.
        """
        logger.info(f"Loading snapshot from: {filepath}")

        if not h5py.is_hdf5(filepath):
            raise ValueError(f"File '{filepath}' is not a valid HDF5 file.")

        try:
            with h5py.File(filepath, "r") as f:
                file_version = f.attrs.get("version", "unknown")
                logger.debug(f"File version: {file_version}")

                missing = [name for name in _REQUIRED_GROUPS if name not in f]
                if missing:
                    raise ValueError(f"Snapshot file is missing groups: {', '.join(missing)}")

                spur = Gear.from_dict(IOManager._attrs_to_dict(f["spur"]))
                pinion = Gear.from_dict(IOManager._attrs_to_dict(f["pinion"]))
                pen = Pen.from_dict(IOManager._attrs_to_dict(f["pen"]))

                grp_kin = f["kinematics"]
                theta = float(grp_kin.attrs.get("theta", 0.0))
                speed = float(grp_kin.attrs.get("speed", 0.0))
                elapsed_ms = int(grp_kin.attrs.get("elapsed_ms", 0))

                # Dataset names sort in write order thanks to the zero padding
                grp_locus = f["locus"]
                segments = []
                for name in sorted(grp_locus.keys()):
                    dset = grp_locus[name]
                    segments.append(
                        PathSegment.from_array(
                            IOManager._as_str(dset.attrs["color"]),
                            float(dset.attrs["size"]),
                            dset[:],
                        )
                    )

            snapshot = SimulationSnapshot(
                spur=spur,
                pinion=pinion,
                pen=pen,
                theta=theta,
                speed=speed,
                elapsed_ms=elapsed_ms,
                segments=segments,
            )
            snapshot.validate()
            logger.info(f"Snapshot loaded from: {filepath} ({len(segments)} segments)")
            return snapshot

        except Exception as e:
            logger.exception(f"Failed to load snapshot: {e}")
            raise e

    @staticmethod
    def load_into(simulation: Simulation, filepath: str) -> None:
        """Load `filepath` and restore it into `simulation`; on failure the simulation is unchanged."""
        snapshot = IOManager.load_snapshot(filepath)
        simulation.restore(snapshot)

    # --- HELPERS ---

    @staticmethod
    def _attrs_to_dict(group: h5py.Group) -> dict:
        data = {}
        for key, val in group.attrs.items():
            if isinstance(val, np.ndarray):
                data[key] = val.tolist()
            elif isinstance(val, (bytes, str)):
                data[key] = IOManager._as_str(val)
            elif isinstance(val, np.generic):
                data[key] = val.item()
            else:
                data[key] = val
        return data

    @staticmethod
    def _as_str(value) -> str:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)
