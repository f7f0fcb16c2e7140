"""Physics engine — exponential attenuation of a photon beam by one layer.

T = exp(-(μ/ρ) × ρ × t)

μ/ρ is read at the tabulated energy nearest to the beam energy; no
interpolation is performed.  Beam energies are in keV, tables in MeV.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from calcatten.core.energy_lookup import closest_index
from calcatten.core.errors import parse_float
from calcatten.core.units import (
    keV_to_MeV,
    mu_rho_to_mu,
    thickness_to_mfp,
    transmission_to_dB,
)
from calcatten.models.material import AttenuationDataPoint
from calcatten.models.results import HvlTvlResult, LayerAttenuation
from calcatten.models.shielding import ShieldingLayer

if TYPE_CHECKING:
    from calcatten.core.material_database import MaterialService

logger = logging.getLogger(__name__)


def attenuation_fraction(
    mass_attenuation: float,
    density: float,
    thickness_cm: float,
) -> float:
    """exp(-c·ρ·t) for μ/ρ [cm²/g], ρ [g/cm³], t [cm]."""
    return math.exp(-mass_attenuation * density * thickness_cm)


class PhysicsEngine:
    """Single-layer photon transmission calculator.

    Args:
        material_service: Material database for density and μ/ρ lookups.
    """

    def __init__(self, material_service: MaterialService) -> None:
        self._materials = material_service

    @property
    def materials(self) -> MaterialService:
        return self._materials

    def mass_attenuation(
        self,
        material: str,
        energy_keV: float,
    ) -> AttenuationDataPoint:
        """Tabulated μ/ρ record nearest to *energy_keV*.

        Args:
            material: Material name.
            energy_keV: Photon energy [keV].

        Returns:
            The selected AttenuationDataPoint (energy in MeV).
        """
        table = self._materials.load_coefficient_table(material)
        energies = [dp.energy_MeV for dp in table]
        i = closest_index(energies, keV_to_MeV(energy_keV))
        dp = table[i]
        logger.info(
            "  Energy and MassAttenCoeff used for %s %g: %g %g",
            material, energy_keV, dp.energy_MeV, dp.mass_attenuation,
        )
        return dp

    def linear_attenuation(self, material: str, energy_keV: float) -> float:
        """Linear attenuation coefficient μ [cm⁻¹] at the nearest tabulated energy."""
        density = self._materials.load_density(material)
        dp = self.mass_attenuation(material, energy_keV)
        return mu_rho_to_mu(dp.mass_attenuation, density)

    def transmit(
        self,
        material: str,
        thickness: str | float,
        energy_keV: str | float,
    ) -> float:
        """Fraction of the beam transmitted through one layer.

        Args:
            material: Material name.
            thickness: Layer thickness [cm], as number or text.
            energy_keV: Photon energy [keV], as number or text.

        Returns:
            Transmitted fraction, in [0, 1] for non-negative inputs.

        Raises:
            InvalidNumber: If *thickness* or *energy_keV* is not a number.
        """
        t = parse_float(thickness, "thickness")
        E = parse_float(energy_keV, "energy")
        return self.calculate_layer(ShieldingLayer(material, t), E).transmission

    def calculate_layer(
        self,
        layer: ShieldingLayer,
        energy_keV: float,
        incident_intensity: float = 1.0,
    ) -> LayerAttenuation:
        """Structured attenuation breakdown for one layer.

        :meth:`transmit` returns the ``transmission`` field of this result.

        Args:
            layer: Material and thickness [cm].
            energy_keV: Photon energy [keV].
            incident_intensity: Intensity entering the layer.
        """
        density = self._materials.load_density(layer.material)
        dp = self.mass_attenuation(layer.material, energy_keV)
        mu = mu_rho_to_mu(dp.mass_attenuation, density)
        mfp = float(thickness_to_mfp(layer.thickness_cm, mu))
        transmission = attenuation_fraction(
            dp.mass_attenuation, density, layer.thickness_cm,
        )
        return LayerAttenuation(
            material=layer.material,
            thickness_cm=layer.thickness_cm,
            energy_keV=energy_keV,
            table_energy_MeV=dp.energy_MeV,
            mass_attenuation=dp.mass_attenuation,
            density=density,
            mu_per_cm=mu,
            mfp=mfp,
            transmission=transmission,
            attenuation_dB=transmission_to_dB(transmission),
            intensity_after=incident_intensity * transmission,
        )

    def calculate_hvl_tvl(
        self,
        material: str,
        energy_keV: float,
    ) -> HvlTvlResult:
        """Half-value layer, tenth-value layer, and mean free path.

        HVL = ln(2) / μ [cm]
        TVL = ln(10) / μ [cm]
        MFP = 1 / μ [cm]

        Args:
            material: Material name.
            energy_keV: Photon energy [keV].

        Returns:
            HvlTvlResult with all values in cm.  All zero if μ ≤ 0.
        """
        mu = self.linear_attenuation(material, energy_keV)
        if mu <= 0:
            return HvlTvlResult()

        return HvlTvlResult(
            hvl_cm=math.log(2) / mu,
            tvl_cm=math.log(10) / mu,
            mfp_cm=1.0 / mu,
            mu_per_cm=mu,
        )
