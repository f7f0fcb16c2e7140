"""Shielding sequencer — applies script commands to a photon beam.

I = I₀ × Π Tᵢ

Each ``Shield`` command multiplies the running intensity by its layer's
transmitted fraction; ``Gamma`` commands set the energy for the layers
that follow.
"""

from __future__ import annotations

import logging
import pathlib
from typing import Iterable

from calcatten.core.physics_engine import PhysicsEngine
from calcatten.core.script_parser import read_script
from calcatten.core.units import transmission_to_dB
from calcatten.models.results import AttenuationResult, LayerAttenuation
from calcatten.models.shielding import (
    AddLayer,
    BeamState,
    Command,
    SetEnergy,
    Unrecognized,
)

logger = logging.getLogger(__name__)


class ShieldingSequencer:
    """Runs a parsed command script through the physics engine.

    Args:
        engine: Transmission calculator.
        strict: Reject unrecognized commands when reading script files.
    """

    def __init__(self, engine: PhysicsEngine, strict: bool = False) -> None:
        self._engine = engine
        self._strict = strict
        self.beam = BeamState()

    def reset(self) -> None:
        self.beam = BeamState()

    def apply(self, command: Command) -> LayerAttenuation | None:
        """Apply one command to the beam.

        Returns:
            The layer breakdown for AddLayer commands, otherwise *None*.
        """
        if isinstance(command, SetEnergy):
            logger.info("Setting gamma-ray energy to %g keV", command.energy_keV)
            self.beam.energy_keV = command.energy_keV
            self.beam.energy_set = True
            return None

        if isinstance(command, AddLayer):
            layer = command.layer
            if not self.beam.energy_set:
                logger.warning(
                    "No gamma-ray energy set before line %d; using %g keV",
                    command.line_number, self.beam.energy_keV,
                )
            logger.info(
                "Calculating intensity following %g cm of %s",
                layer.thickness_cm, layer.material,
            )
            result = self._engine.calculate_layer(
                layer, self.beam.energy_keV, self.beam.current_intensity,
            )
            self.beam.current_intensity *= result.transmission
            result.intensity_after = self.beam.current_intensity
            logger.info("  Transmit frac, this layer: %g", result.transmission)
            logger.info(
                "  Remaining I = %g, I_init = %g",
                self.beam.current_intensity, self.beam.initial_intensity,
            )
            return result

        if isinstance(command, Unrecognized):
            logger.debug(
                "Skipping unrecognized command %r at line %d",
                command.label, command.line_number,
            )
            return None

        raise TypeError(f"Unknown command type: {type(command).__name__}")

    def run(self, commands: Iterable[Command]) -> AttenuationResult:
        """Apply *commands* in order to a fresh beam.

        Returns:
            AttenuationResult with the final intensity and per-layer breakdown.
        """
        self.reset()
        layers: list[LayerAttenuation] = []
        for command in commands:
            result = self.apply(command)
            if result is not None:
                layers.append(result)

        transmission = self.beam.relative_intensity
        return AttenuationResult(
            initial_intensity=self.beam.initial_intensity,
            final_intensity=self.beam.current_intensity,
            transmission=transmission,
            attenuation_dB=transmission_to_dB(transmission),
            total_mfp=sum(layer.mfp for layer in layers),
            layers=layers,
        )

    def run_script(self, path: str | pathlib.Path) -> AttenuationResult:
        """Read, parse and run a command script file."""
        return self.run(read_script(path, strict=self._strict))
