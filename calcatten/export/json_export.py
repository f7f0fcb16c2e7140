"""JSON result export.

Writes AttenuationResult as formatted JSON with the app version.
"""

from __future__ import annotations

import dataclasses
import json

from calcatten.constants import APP_VERSION
from calcatten.models.results import AttenuationResult, LayerAttenuation


def result_to_dict(result: AttenuationResult) -> dict:
    """Convert a result to a JSON-safe dict."""
    return dataclasses.asdict(result)


def dict_to_result(data: dict) -> AttenuationResult:
    """Rebuild an AttenuationResult from :func:`result_to_dict` output."""
    layer_fields = {f.name for f in dataclasses.fields(LayerAttenuation)}
    layers = [
        LayerAttenuation(**{k: v for k, v in raw.items() if k in layer_fields})
        for raw in data.get("layers", [])
    ]
    return AttenuationResult(
        initial_intensity=data.get("initial_intensity", 1.0),
        final_intensity=data.get("final_intensity", 1.0),
        transmission=data.get("transmission", 1.0),
        attenuation_dB=data.get("attenuation_dB", 0.0),
        total_mfp=data.get("total_mfp", 0.0),
        layers=layers,
    )


class JsonExporter:
    """JSON result file operations."""

    def export_result(
        self, result: AttenuationResult, output_path: str,
    ) -> None:
        """Write *result* as formatted JSON file.

        Args:
            result: Attenuation result from the sequencer.
            output_path: Destination file path (.json).
        """
        data = result_to_dict(result)
        data["app_version"] = APP_VERSION
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def import_result(self, input_path: str) -> AttenuationResult:
        """Read a result previously written by :meth:`export_result`."""
        with open(input_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return dict_to_result(data)
