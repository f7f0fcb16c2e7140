"""Material table loader tests.

Validates MaterialService against the bundled NIST tables and against
generated tables for the error paths.
"""

import pytest

from calcatten.core.errors import (
    InvalidNumber,
    MalformedRecord,
    MissingField,
    ResourceNotFound,
)
from calcatten.core.material_database import MaterialService


@pytest.fixture(scope="module")
def svc() -> MaterialService:
    return MaterialService()


def _write(tmp_path, material: str, text: str):
    path = tmp_path / f"{material}Data.txt"
    path.write_text(text, encoding="utf-8")
    return path


class TestBundledTables:
    def test_available_materials(self, svc: MaterialService):
        assert svc.available_materials() == ["Aluminum", "Iron", "Lead", "Water"]

    def test_data_file_path(self, svc: MaterialService):
        path = svc.data_file_path("Lead")
        assert path.name == "LeadData.txt"
        assert path.parent == svc.data_dir

    def test_lead_density(self, svc: MaterialService):
        assert svc.load_density("Lead") == pytest.approx(11.35)

    def test_water_density(self, svc: MaterialService):
        assert svc.load_density("Water") == pytest.approx(1.0)

    def test_lead_table(self, svc: MaterialService):
        table = svc.load_coefficient_table("Lead")
        assert len(table) == 26
        assert table[0].energy_MeV == pytest.approx(0.01)
        assert table[-1].energy_MeV == pytest.approx(10.0)

    def test_lead_1MeV_record(self, svc: MaterialService):
        """Pb μ/ρ @ 1 MeV = 0.07102 cm²/g, μ_en/ρ = 0.03654 cm²/g (NIST)."""
        table = svc.load_coefficient_table("Lead")
        dp = next(d for d in table if d.energy_MeV == pytest.approx(1.0))
        assert dp.mass_attenuation == pytest.approx(0.07102)
        assert dp.mass_energy_absorption == pytest.approx(0.03654)

    def test_tables_ascending(self, svc: MaterialService):
        for material in svc.available_materials():
            energies = [dp.energy_MeV for dp in svc.load_properties(material).energy_table]
            assert all(a < b for a, b in zip(energies, energies[1:])), material

    def test_load_properties(self, svc: MaterialService):
        props = svc.load_properties("Iron")
        assert props.name == "Iron"
        assert props.density == pytest.approx(7.874)
        assert len(props.energy_table) == 26


class TestTableErrors:
    def test_missing_file(self, tmp_path):
        svc = MaterialService(tmp_path)
        with pytest.raises(ResourceNotFound, match="UnobtaniumData.txt"):
            svc.load_density("Unobtanium")

    def test_missing_file_is_file_not_found(self, tmp_path):
        svc = MaterialService(tmp_path)
        with pytest.raises(FileNotFoundError):
            svc.load_coefficient_table("Unobtanium")

    def test_line_without_separator(self, tmp_path):
        _write(tmp_path, "Bad", "Density(g/cm^3):11.35\n")
        svc = MaterialService(tmp_path)
        with pytest.raises(MalformedRecord, match="line 1"):
            svc.load_density("Bad")

    def test_no_density(self, tmp_path):
        _write(tmp_path, "NoRho", "MAC(MeV,cm^2/g,cm^2/g): 0.1 1.0 0.5\n")
        svc = MaterialService(tmp_path)
        with pytest.raises(MissingField, match="No density"):
            svc.load_density("NoRho")

    def test_no_mac_records(self, tmp_path):
        _write(tmp_path, "NoMac", "Density(g/cm^3): 2.0\n")
        svc = MaterialService(tmp_path)
        with pytest.raises(MissingField):
            svc.load_coefficient_table("NoMac")

    def test_mac_with_one_field(self, tmp_path):
        _write(tmp_path, "Short", "Density(g/cm^3): 2.0\nMAC(MeV,cm^2/g,cm^2/g): 0.1\n")
        svc = MaterialService(tmp_path)
        with pytest.raises(MalformedRecord, match="line 2"):
            svc.load_coefficient_table("Short")

    def test_bad_number(self, tmp_path):
        _write(tmp_path, "Nan", "Density(g/cm^3): heavy\n")
        svc = MaterialService(tmp_path)
        with pytest.raises(InvalidNumber, match="heavy"):
            svc.load_density("Nan")

    def test_invalid_utf8(self, tmp_path):
        (tmp_path / "LatinData.txt").write_bytes(
            b"Density(g/cm^3): 2.0\nRef: \xe9t\xe9\nMAC(MeV,cm^2/g,cm^2/g): 0.5 0.2 0.1\n"
        )
        svc = MaterialService(tmp_path)
        with pytest.raises(MalformedRecord, match="UTF-8 at line 2"):
            svc.load_coefficient_table("Latin")

    def test_non_finite_density(self, tmp_path):
        _write(tmp_path, "Inf", "Density(g/cm^3): inf\n")
        with pytest.raises(InvalidNumber, match="not finite"):
            MaterialService(tmp_path).load_density("Inf")


class TestTableParsing:
    def test_first_density_wins(self, tmp_path):
        _write(tmp_path, "Two", "Density(g/cm^3): 1.5\nDensity(g/cm^3): 9.9\n")
        assert MaterialService(tmp_path).load_density("Two") == pytest.approx(1.5)

    def test_density_scan_stops_at_record(self, tmp_path):
        # The malformed line after the density is never reached.
        _write(tmp_path, "Tail", "Density(g/cm^3): 1.5\nbroken\n")
        svc = MaterialService(tmp_path)
        assert svc.load_density("Tail") == pytest.approx(1.5)
        with pytest.raises(MalformedRecord):
            svc.load_coefficient_table("Tail")

    def test_other_labels_ignored(self, tmp_path):
        _write(tmp_path, "Mixed", (
            "Material: Mixed\n"
            "Density(g/cm^3): 3.0\n"
            "Note: not a record\n"
            "MAC(MeV,cm^2/g,cm^2/g): 0.5 0.2 0.1\n"
        ))
        table = MaterialService(tmp_path).load_coefficient_table("Mixed")
        assert len(table) == 1
        assert table[0].mass_attenuation == pytest.approx(0.2)

    def test_two_field_mac_record(self, tmp_path):
        _write(tmp_path, "Two", "Density(g/cm^3): 3.0\nMAC(MeV,cm^2/g,cm^2/g): 0.5 0.2\n")
        dp = MaterialService(tmp_path).load_coefficient_table("Two")[0]
        assert dp.mass_energy_absorption == 0.0

    def test_tab_separated_fields(self, tmp_path):
        _write(tmp_path, "Tabs", "Density(g/cm^3):\t3.0\nMAC(MeV,cm^2/g,cm^2/g):\t0.5\t0.2\t0.1\n")
        svc = MaterialService(tmp_path)
        assert svc.load_density("Tabs") == pytest.approx(3.0)
        assert svc.load_coefficient_table("Tabs")[0].energy_MeV == pytest.approx(0.5)


class TestCache:
    _TEXT = "Density(g/cm^3): 2.0\nMAC(MeV,cm^2/g,cm^2/g): 0.5 0.2 0.1\n"
    _CHANGED = "Density(g/cm^3): 4.0\nMAC(MeV,cm^2/g,cm^2/g): 0.5 0.3 0.1\n"

    def test_rescans_without_cache(self, tmp_path):
        path = _write(tmp_path, "M", self._TEXT)
        svc = MaterialService(tmp_path)
        assert svc.load_density("M") == pytest.approx(2.0)
        path.write_text(self._CHANGED, encoding="utf-8")
        assert svc.load_density("M") == pytest.approx(4.0)

    def test_cache_keeps_first_read(self, tmp_path):
        path = _write(tmp_path, "M", self._TEXT)
        svc = MaterialService(tmp_path, cache=True)
        assert svc.load_density("M") == pytest.approx(2.0)
        assert svc.load_coefficient_table("M")[0].mass_attenuation == pytest.approx(0.2)
        path.write_text(self._CHANGED, encoding="utf-8")
        assert svc.load_density("M") == pytest.approx(2.0)
        assert svc.load_coefficient_table("M")[0].mass_attenuation == pytest.approx(0.2)

    def test_clear_cache(self, tmp_path):
        path = _write(tmp_path, "M", self._TEXT)
        svc = MaterialService(tmp_path, cache=True)
        svc.load_density("M")
        path.write_text(self._CHANGED, encoding="utf-8")
        svc.clear_cache()
        assert svc.load_density("M") == pytest.approx(4.0)
