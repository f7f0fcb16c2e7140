"""Material database service — reads ``<material>Data.txt`` property tables.

Each table is a line-oriented text file::

    Density(g/cm^3): 11.35
    MAC(MeV,cm^2/g,cm^2/g): 1.000E-02 1.306E+02 1.247E+02
    ...

The label is the text before the first whitespace run.  Only the density
and MAC records are consumed; other labels are ignored.

All returned μ/ρ values are in cm²/g, energies in MeV (table units).
"""

from __future__ import annotations

import logging
import pathlib
import re
from contextlib import closing
from typing import Iterator

from calcatten.constants import (
    DATA_FILE_SUFFIX,
    DEFAULT_DATA_DIR,
    DENSITY_LABEL,
    MAC_LABEL,
)
from calcatten.core.errors import (
    MalformedRecord,
    MissingField,
    ResourceNotFound,
    parse_float,
)
from calcatten.models.material import AttenuationDataPoint, MaterialProperties

logger = logging.getLogger(__name__)

_LABEL_SPLIT = re.compile(r"\s+")


class MaterialService:
    """Service for material property lookup.

    Every lookup re-opens and re-scans the material's table unless
    *cache* is set, in which case parsed values are kept per material
    for the lifetime of the service.

    Args:
        data_dir: Directory holding ``<material>Data.txt`` files.  If *None*,
                  the tables bundled with the package are used.
        cache: Keep parsed densities and tables between lookups.
    """

    def __init__(
        self,
        data_dir: str | pathlib.Path | None = None,
        cache: bool = False,
    ) -> None:
        if data_dir is None:
            data_dir = DEFAULT_DATA_DIR
        self._data_dir = pathlib.Path(data_dir)
        self._cache_enabled = cache
        self._densities: dict[str, float] = {}
        self._tables: dict[str, list[AttenuationDataPoint]] = {}

    @property
    def data_dir(self) -> pathlib.Path:
        return self._data_dir

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def data_file_path(self, material: str) -> pathlib.Path:
        """Return the table path for *material*."""
        return self._data_dir / f"{material}{DATA_FILE_SUFFIX}"

    def available_materials(self) -> list[str]:
        """Material names with a table in the data directory, sorted."""
        if not self._data_dir.is_dir():
            return []
        return sorted(
            p.name[: -len(DATA_FILE_SUFFIX)]
            for p in self._data_dir.glob(f"*{DATA_FILE_SUFFIX}")
            if p.is_file() and len(p.name) > len(DATA_FILE_SUFFIX)
        )

    def load_density(self, material: str) -> float:
        """Density of *material* [g/cm³].

        Returns the first density record; the rest of the file is not read.

        Raises:
            ResourceNotFound: If the table cannot be opened.
            MalformedRecord: If a line before the density has no label separator.
            MissingField: If the table has no density record.
            InvalidNumber: If the density value is not a number.
        """
        if self._cache_enabled and material in self._densities:
            return self._densities[material]

        path = self.data_file_path(material)
        density: float | None = None
        with closing(self._records(path)) as records:
            for line_number, label, value in records:
                if label == DENSITY_LABEL:
                    density = parse_float(
                        value, f"density in {path.name} line {line_number}",
                    )
                    break

        if density is None:
            raise MissingField(f"No density found in data file {path}")

        logger.info("  Density of %s: %g g/cm^3", material, density)
        if self._cache_enabled:
            self._densities[material] = density
        return density

    def load_coefficient_table(self, material: str) -> list[AttenuationDataPoint]:
        """All MAC records of *material*, in file order.

        Raises:
            ResourceNotFound: If the table cannot be opened.
            MalformedRecord: If a line has no label separator, or a MAC
                record has fewer than two values.
            MissingField: If the table has no MAC records.
            InvalidNumber: If a MAC value is not a number.
        """
        if self._cache_enabled and material in self._tables:
            return list(self._tables[material])

        path = self.data_file_path(material)
        table: list[AttenuationDataPoint] = []
        for line_number, label, value in self._records(path):
            if label != MAC_LABEL:
                continue
            fields = value.split()
            if len(fields) < 2:
                raise MalformedRecord(
                    f"Unexpected data file format in {path.name} line "
                    f"{line_number}: expected '<energy> <mu/rho> [<mu_en/rho>]'"
                )
            where = f"{path.name} line {line_number}"
            table.append(AttenuationDataPoint(
                energy_MeV=parse_float(fields[0], f"energy in {where}"),
                mass_attenuation=parse_float(fields[1], f"mass attenuation in {where}"),
                mass_energy_absorption=(
                    parse_float(fields[2], f"mass energy-absorption in {where}")
                    if len(fields) > 2 else 0.0
                ),
            ))

        if not table:
            raise MissingField(f"No mass attenuation data found in data file {path}")

        if self._cache_enabled:
            self._tables[material] = list(table)
        return table

    def load_properties(self, material: str) -> MaterialProperties:
        """Density and attenuation table of *material* in one object."""
        return MaterialProperties(
            name=material,
            density=self.load_density(material),
            energy_table=self.load_coefficient_table(material),
        )

    def clear_cache(self) -> None:
        self._densities.clear()
        self._tables.clear()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _records(self, path: pathlib.Path) -> Iterator[tuple[int, str, str]]:
        """Yield ``(line_number, label, value)`` for each line of *path*.

        The file is closed when the generator is exhausted or closed.
        """
        logger.debug("Reading material table %s", path)
        try:
            f = open(path, "rb")
        except OSError as exc:
            raise ResourceNotFound(f"Cannot open data file {path}: {exc.strerror}") from exc

        with f:
            for line_number, raw in enumerate(f, start=1):
                try:
                    line = raw.decode("utf-8").rstrip("\r\n")
                except UnicodeDecodeError as exc:
                    raise MalformedRecord(
                        f"Data file {path.name} is not valid UTF-8 at line "
                        f"{line_number}"
                    ) from exc
                parts = _LABEL_SPLIT.split(line, maxsplit=1)
                if len(parts) < 2:
                    raise MalformedRecord(
                        f"Unexpected data file format in {path.name} line "
                        f"{line_number}: {line!r}"
                    )
                yield line_number, parts[0], parts[1].strip()
