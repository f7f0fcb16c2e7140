"""Unit conversion module — single conversion point for energies and attenuation.

Internal (core) units:
    Length   : cm
    Energy   : keV (command scripts), MeV (material tables)
    Density  : g/cm³
    μ/ρ      : cm²/g
    μ        : cm⁻¹
    Thickness: mfp (dimensionless)
"""

import math
from typing import NewType

from calcatten.constants import KEV_PER_MEV

# Type aliases — zero runtime cost, visible in IDE for unit-error detection
MeV = NewType('MeV', float)
Mfp = NewType('Mfp', float)


# ---------------------------------------------------------------------------
# Energy conversions
# ---------------------------------------------------------------------------

def keV_to_MeV(kev: float) -> MeV:
    """keV → MeV."""
    return MeV(kev / KEV_PER_MEV)


# ---------------------------------------------------------------------------
# Optical thickness conversions
# ---------------------------------------------------------------------------

def mu_rho_to_mu(mass_attenuation: float, density: float) -> float:
    """μ [cm⁻¹] = (μ/ρ) [cm²/g] × ρ [g/cm³]."""
    return mass_attenuation * density


def thickness_to_mfp(thickness_cm: float, mu_per_cm: float) -> Mfp:
    """Physical thickness [cm] × linear attenuation [cm⁻¹] → optical thickness [mfp].

    Args:
        thickness_cm: Material thickness [cm].
        mu_per_cm: Linear attenuation coefficient [cm⁻¹].

    Returns:
        Optical thickness [mfp, dimensionless].
    """
    return Mfp(mu_per_cm * thickness_cm)


# ---------------------------------------------------------------------------
# Attenuation conversions
# ---------------------------------------------------------------------------

def transmission_to_dB(transmission: float) -> float:
    """Transmission ratio (0–1) → attenuation in dB.

    Args:
        transmission: Transmission ratio [dimensionless, 0–1].

    Returns:
        Attenuation [dB, positive value].
    """
    return -10.0 * math.log10(max(transmission, 1e-30))
