"""Material data models.

Defines material properties and the energy-indexed attenuation table
read from ``<material>Data.txt`` files.
"""

from dataclasses import dataclass, field


@dataclass
class AttenuationDataPoint:
    """Single energy point in attenuation data.

    All cross-section values in cm²/g.

    Attributes:
        energy_MeV: Photon energy [MeV] (table unit).
        mass_attenuation: Total μ/ρ [cm²/g].
        mass_energy_absorption: μ_en/ρ [cm²/g].  Parsed, not used.
    """
    energy_MeV: float
    mass_attenuation: float
    mass_energy_absorption: float = 0.0


@dataclass
class MaterialProperties:
    """Physical properties of one shielding material.

    Attributes:
        name: Material name as used in command scripts ("Lead", ...).
        density: Density [g/cm³].
        energy_table: Attenuation data, ascending by energy.
    """
    name: str
    density: float
    energy_table: list[AttenuationDataPoint] = field(default_factory=list)
