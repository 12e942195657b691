# limnos/shared/paths.py

"""Centralized path definitions for the LIMNOS engine."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[2]

CONFIG_PATH = PROJECT_ROOT / "config.yaml"
