"""CSV export — per-layer attenuation breakdown.

BOM UTF-8 encoding for Excel compatibility.
"""

from __future__ import annotations

import csv

from calcatten.models.results import AttenuationResult

LAYER_HEADERS = [
    "Layer", "Material", "Thickness (cm)", "Energy (keV)",
    "Table Energy (MeV)", "mu/rho (cm2/g)", "Density (g/cm3)",
    "mu (cm-1)", "mfp", "Transmission", "Attenuation (dB)",
    "Remaining Intensity",
]


class CsvExporter:
    """CSV file export operations."""

    def export_layers(
        self, result: AttenuationResult, output_path: str,
    ) -> None:
        """Export the per-layer breakdown as CSV.

        One row per shielding layer, in script order.

        Args:
            result: Attenuation result from the sequencer.
            output_path: Destination file path (.csv).
        """
        with open(output_path, "w", newline="", encoding="utf-8-sig") as f:
            writer = csv.writer(f)
            writer.writerow(LAYER_HEADERS)
            for i, layer in enumerate(result.layers, start=1):
                writer.writerow([
                    i,
                    layer.material,
                    f"{layer.thickness_cm:.6g}",
                    f"{layer.energy_keV:.6g}",
                    f"{layer.table_energy_MeV:.6g}",
                    f"{layer.mass_attenuation:.6g}",
                    f"{layer.density:.6g}",
                    f"{layer.mu_per_cm:.6g}",
                    f"{layer.mfp:.6g}",
                    f"{layer.transmission:.6g}",
                    f"{layer.attenuation_dB:.4f}",
                    f"{layer.intensity_after:.6g}",
                ])
