"""Command script parsing.

A script holds one command per line; the label and its argument are
separated by the first whitespace run::

    Gamma(keV): 662
    Shield(type,cm): Lead,1.0

Parsing is per line and stateless.  Each line becomes one
:data:`~calcatten.models.shielding.Command`.
"""

from __future__ import annotations

import pathlib
import re
from typing import Iterable

from calcatten.constants import GAMMA_LABEL, SHIELD_ARG_SEPARATOR, SHIELD_LABEL
from calcatten.core.errors import ResourceNotFound, ScriptFormatError, parse_float
from calcatten.models.shielding import (
    AddLayer,
    Command,
    SetEnergy,
    ShieldingLayer,
    Unrecognized,
)

_LABEL_SPLIT = re.compile(r"\s+")


def split_label(line: str, line_number: int = 0) -> tuple[str, str]:
    """Split a script line into ``(label, argument)``.

    Raises:
        ScriptFormatError: If the line has no whitespace separator.
    """
    line = line.rstrip("\r\n")
    parts = _LABEL_SPLIT.split(line, maxsplit=1)
    if len(parts) < 2:
        raise ScriptFormatError(
            f"Unexpected macro format at line {line_number}: {line!r}"
        )
    return parts[0], parts[1].strip()


def parse_shield_argument(argument: str, line_number: int = 0) -> ShieldingLayer:
    """Parse ``<material>,<thickness>`` into a ShieldingLayer."""
    material, sep, thickness = argument.partition(SHIELD_ARG_SEPARATOR)
    material = material.strip()
    if not sep or not material:
        raise ScriptFormatError(
            f"Expected '<material>{SHIELD_ARG_SEPARATOR}<thickness>' at line "
            f"{line_number}: {argument!r}"
        )
    return ShieldingLayer(
        material=material,
        thickness_cm=parse_float(thickness, f"thickness at line {line_number}"),
    )


def parse_command(line: str, line_number: int = 0, strict: bool = False) -> Command:
    """Parse one script line.

    Args:
        line: Raw script line.
        line_number: 1-based line number, for messages.
        strict: Reject labels other than Gamma and Shield.

    Raises:
        ScriptFormatError: Missing separator, bad Shield argument, or an
            unknown label in strict mode.
        InvalidNumber: Energy or thickness is not a number.
    """
    label, argument = split_label(line, line_number)

    if label == GAMMA_LABEL:
        return SetEnergy(
            energy_keV=parse_float(argument, f"energy at line {line_number}"),
            line_number=line_number,
        )
    if label == SHIELD_LABEL:
        return AddLayer(
            layer=parse_shield_argument(argument, line_number),
            line_number=line_number,
        )
    if strict:
        raise ScriptFormatError(
            f"Unrecognized command {label!r} at line {line_number}"
        )
    return Unrecognized(label=label, argument=argument, line_number=line_number)


def parse_script(lines: Iterable[str], strict: bool = False) -> list[Command]:
    """Parse every line of a script, in order."""
    return [
        parse_command(line, line_number, strict)
        for line_number, line in enumerate(lines, start=1)
    ]


def read_script(path: str | pathlib.Path, strict: bool = False) -> list[Command]:
    """Read and parse a command script file.

    Raises:
        ResourceNotFound: If the file cannot be opened.
        ScriptFormatError: If the file is not valid UTF-8.
    """
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except UnicodeDecodeError as exc:
        raise ScriptFormatError(
            f"Script {path} is not valid UTF-8 (byte offset {exc.start})"
        ) from exc
    except OSError as exc:
        raise ResourceNotFound(f"Cannot open script {path}: {exc.strerror}") from exc
    return parse_script(lines, strict)
