"""Attenuation result data models.

Dataclasses returned by PhysicsEngine and ShieldingSequencer.
"""

from dataclasses import dataclass, field


@dataclass
class LayerAttenuation:
    """Per-layer attenuation breakdown.

    Attributes:
        material: Material name.
        thickness_cm: Layer thickness [cm].
        energy_keV: Requested beam energy [keV].
        table_energy_MeV: Nearest tabulated energy actually used [MeV].
        mass_attenuation: μ/ρ at the tabulated energy [cm²/g].
        density: Material density [g/cm³].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].
        mfp: Optical thickness μ×x [dimensionless].
        transmission: Transmitted fraction of this layer [0–1].
        attenuation_dB: Attenuation of this layer in dB (positive).
        intensity_after: Cumulative intensity after this layer.
    """
    material: str = ""
    thickness_cm: float = 0.0
    energy_keV: float = 0.0
    table_energy_MeV: float = 0.0
    mass_attenuation: float = 0.0
    density: float = 0.0
    mu_per_cm: float = 0.0
    mfp: float = 0.0
    transmission: float = 1.0
    attenuation_dB: float = 0.0
    intensity_after: float = 1.0


@dataclass
class AttenuationResult:
    """Multi-layer attenuation result.

    Attributes:
        initial_intensity: Incident intensity I₀.
        final_intensity: Intensity after all layers.
        transmission: I/I₀ ratio [0–1].
        attenuation_dB: Total attenuation in dB (positive).
        total_mfp: Total optical thickness [mfp].
        layers: Per-layer breakdown, in script order.
    """
    initial_intensity: float = 1.0
    final_intensity: float = 1.0
    transmission: float = 1.0
    attenuation_dB: float = 0.0
    total_mfp: float = 0.0
    layers: list[LayerAttenuation] = field(default_factory=list)


@dataclass
class HvlTvlResult:
    """Half-value / tenth-value layer result.

    All lengths in cm (core units).

    Attributes:
        hvl_cm: Half-value layer [cm].
        tvl_cm: Tenth-value layer [cm].
        mfp_cm: Mean free path [cm].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].
    """
    hvl_cm: float = 0.0
    tvl_cm: float = 0.0
    mfp_cm: float = 0.0
    mu_per_cm: float = 0.0
