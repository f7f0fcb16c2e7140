"""Application-wide constants.

Record labels follow the macro and data-file formats used by the
attenuation calculator.
"""

import pathlib

APP_NAME = "CalcAtten"
APP_VERSION = "0.1.0"

# Beam
INITIAL_INTENSITY = 1.0
DEFAULT_ENERGY_KEV = 0.0
KEV_PER_MEV = 1000.0

# Command script labels
GAMMA_LABEL = "Gamma(keV):"
SHIELD_LABEL = "Shield(type,cm):"
SHIELD_ARG_SEPARATOR = ","

# Material data file labels
DENSITY_LABEL = "Density(g/cm^3):"
MAC_LABEL = "MAC(MeV,cm^2/g,cm^2/g):"

# Material data files: <data_dir>/<material>Data.txt
DATA_FILE_SUFFIX = "Data.txt"
DEFAULT_DATA_DIR = pathlib.Path(__file__).resolve().parent / "data"
