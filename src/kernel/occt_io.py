"""STEP file import/export and Open CASCADE binding information.

STEP is the interchange format for skeleton parts: solids can be read in and
cast into a skeleton, and a skeleton's combined solid can be written out.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import OCP
import structlog
from OCP.IFSelect import IFSelect_RetDone
from OCP.Interface import Interface_Static
from OCP.STEPControl import STEPControl_AsIs, STEPControl_Reader, STEPControl_Writer
from OCP.TopAbs import TopAbs_VERTEX
from OCP.TopExp import TopExp_Explorer
from OCP.TopoDS import TopoDS_Shape

logger = structlog.get_logger(__name__)


class StepImportError(Exception):
    """Raised when STEP file import fails."""

    pass


class StepExportError(Exception):
    """Raised when STEP file export fails."""

    pass


@dataclass
class LoadedModel:
    """Container for a successfully loaded STEP model."""

    model_id: str
    file_path: str
    occt_shape: Any  # TopoDS_Shape (kept opaque for type safety)
    units: dict[str, str]
    metadata: dict[str, Any]

    occt_binding: str
    occt_version: str

    def __post_init__(self) -> None:
        """Validate loaded model."""
        if not self.model_id:
            self.model_id = Path(self.file_path).stem

        if "file_size" not in self.metadata:
            try:
                self.metadata["file_size"] = os.path.getsize(self.file_path)
            except OSError:
                self.metadata["file_size"] = -1


def get_occt_info() -> dict[str, Any]:
    """Get information about the OCCT binding in use.

    Returns:
        Dictionary with binding name and version info
    """
    info = {
        "binding": "OCP",
        "occt_version": getattr(OCP, "__version__", "unknown"),
    }
    logger.debug("OCCT binding info", **info)
    return info


def _validate_step_file(file_path: str | Path) -> Path:
    """Validate STEP file exists and is readable.

    Raises:
        StepImportError: If file validation fails
    """
    path = Path(file_path).resolve()

    if not path.exists():
        raise StepImportError(f"STEP file not found: {path}")

    if not path.is_file():
        raise StepImportError(f"Path is not a file: {path}")

    if path.stat().st_size == 0:
        raise StepImportError(f"STEP file is empty: {path}")

    with open(path, encoding="utf-8", errors="ignore") as f:
        header = f.read(1024)
    if not header.startswith("ISO-10303-"):
        logger.warning("File does not start with ISO-10303 header", file=str(path))

    return path


def _extract_step_units(file_path: Path) -> dict[str, str]:
    """Extract unit information from the STEP file data section.

    Returns:
        Dictionary mapping unit types to unit names
    """
    units = {"length": "mm", "angle": "deg"}

    try:
        text = file_path.read_text(encoding="utf-8", errors="ignore").upper()
    except OSError as e:
        logger.warning("Could not read STEP units", file=str(file_path), error=str(e))
        return units

    if "INCH" in text:
        units["length"] = "in"
    elif ".MILLI.,.METRE." in text or "MILLIMETRE" in text:
        units["length"] = "mm"
    elif ".METRE." in text:
        units["length"] = "m"

    if "RADIAN" in text and "DEGREE" not in text:
        units["angle"] = "rad"

    return units


def load_step(file_path: str | Path) -> LoadedModel:
    """Load a STEP file into a single OCCT shape.

    Args:
        file_path: Path to the STEP file

    Returns:
        LoadedModel containing the geometry and metadata

    Raises:
        StepImportError: If file validation or import fails
    """
    path = _validate_step_file(file_path)
    logger.info("Loading STEP file", file=str(path))

    reader = STEPControl_Reader()
    status = reader.ReadFile(str(path))
    if status != IFSelect_RetDone:
        raise StepImportError(f"STEP read failed with status: {status}")

    nb_roots = reader.NbRootsForTransfer()
    if nb_roots == 0:
        raise StepImportError("No geometry roots found in STEP file")

    logger.debug("Found geometry roots", count=nb_roots)
    reader.TransferRoots()

    shape = reader.OneShape()
    if shape.IsNull():
        raise StepImportError("Failed to create unified shape from STEP file")

    info = get_occt_info()
    model = LoadedModel(
        model_id=path.stem,
        file_path=str(path),
        occt_shape=shape,
        units=_extract_step_units(path),
        metadata={
            "nb_roots": nb_roots,
            "reader_type": "STEPControl_Reader",
            "file_size": path.stat().st_size,
        },
        occt_binding=info["binding"],
        occt_version=info["occt_version"],
    )

    logger.info("Successfully loaded STEP file", file=str(path), model_id=model.model_id)
    return model


def write_step(shape: TopoDS_Shape, file_path: str | Path, schema: str = "AP214") -> Path:
    """Write a shape to a STEP file.

    Args:
        shape: Shape to write, usually a skeleton's combined solid
        file_path: Destination path; parent directories are created
        schema: STEP application protocol

    Returns:
        Path of the written file

    Raises:
        StepExportError: If the shape is null or empty, or OCCT fails to write
    """
    if shape is None or shape.IsNull():
        raise StepExportError("Cannot export a null shape")

    if not TopExp_Explorer(shape, TopAbs_VERTEX).More():
        raise StepExportError("Cannot export a shape without geometry")

    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    Interface_Static.SetCVal_s("write.step.schema", schema)
    writer = STEPControl_Writer()
    transfer_status = writer.Transfer(shape, STEPControl_AsIs)
    if transfer_status != IFSelect_RetDone:
        raise StepExportError(f"STEP transfer failed with status: {transfer_status}")

    write_status = writer.Write(str(path))
    if write_status != IFSelect_RetDone:
        raise StepExportError(f"STEP write failed with status: {write_status}")

    logger.info("STEP file written", file=str(path), schema=schema)
    return path
