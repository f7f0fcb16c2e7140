"""Shielding script data models.

One command per script line.  ``Command`` is the union of the parsed
command kinds; the sequencer dispatches on the concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from calcatten.constants import DEFAULT_ENERGY_KEV, INITIAL_INTENSITY


@dataclass(frozen=True)
class ShieldingLayer:
    """One material + thickness pair applied to the beam.

    Attributes:
        material: Material name, selects ``<material>Data.txt``.
        thickness_cm: Layer thickness [cm].
    """
    material: str
    thickness_cm: float


@dataclass(frozen=True)
class SetEnergy:
    """``Gamma(keV): <float>`` — set the beam energy."""
    energy_keV: float
    line_number: int = 0


@dataclass(frozen=True)
class AddLayer:
    """``Shield(type,cm): <material>,<thickness>`` — add a shielding layer."""
    layer: ShieldingLayer
    line_number: int = 0


@dataclass(frozen=True)
class Unrecognized:
    """Any other script line; skipped unless parsing is strict."""
    label: str
    argument: str
    line_number: int = 0


Command = Union[SetEnergy, AddLayer, Unrecognized]


@dataclass
class BeamState:
    """Photon beam state carried through the shielding stack.

    Attributes:
        initial_intensity: Incident intensity (fixed at 1.0).
        current_intensity: Intensity after the layers applied so far.
        energy_keV: Photon energy [keV]; 0.0 until a Gamma command sets it.
        energy_set: Whether a Gamma command has been seen.
    """
    initial_intensity: float = INITIAL_INTENSITY
    current_intensity: float = INITIAL_INTENSITY
    energy_keV: float = DEFAULT_ENERGY_KEV
    energy_set: bool = False

    @property
    def relative_intensity(self) -> float:
        """Current intensity as a fraction of the initial one."""
        return self.current_intensity / self.initial_intensity
