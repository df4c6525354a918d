from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml  # type: ignore[import-untyped]

DEFAULT_INPUT_CSV = "input.csv"
DEFAULT_OUTPUT_CSV = "output.csv"


@dataclass
class InputsConfig:
    forms_csv: str = DEFAULT_INPUT_CSV
    encoding: Optional[str] = None


@dataclass
class OutputsConfig:
    contacts_csv: str = DEFAULT_OUTPUT_CSV


@dataclass
class ConversionConfig:
    labels: Optional[str] = None


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ConverterConfig:
    inputs: InputsConfig
    outputs: OutputsConfig
    conversion: ConversionConfig
    logging: LoggingConfig


def _load_yaml(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    with open(path, "r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_converter_config(args: argparse.Namespace) -> ConverterConfig:
    config_data = _load_yaml(getattr(args, "config", None))
    inputs_cfg = config_data.get("inputs", {}) or {}
    outputs_cfg = config_data.get("outputs", {}) or {}
    conversion_cfg = config_data.get("conversion", {}) or {}
    logging_cfg = config_data.get("logging", {}) or {}

    inputs = InputsConfig(
        forms_csv=getattr(args, "input_csv", None)
        or inputs_cfg.get("forms_csv")
        or DEFAULT_INPUT_CSV,
        encoding=getattr(args, "input_encoding", None) or inputs_cfg.get("encoding"),
    )

    outputs = OutputsConfig(
        contacts_csv=getattr(args, "output_csv", None)
        or outputs_cfg.get("contacts_csv")
        or DEFAULT_OUTPUT_CSV,
    )

    # --labels "" is an explicit empty label, not "unset"
    labels = getattr(args, "labels", None)
    if labels is None and conversion_cfg.get("labels") is not None:
        labels = str(conversion_cfg["labels"])
    conversion = ConversionConfig(labels=labels)

    arg_level = getattr(args, "log_level", None)
    effective_level = (arg_level or logging_cfg.get("level") or "WARNING").upper()
    logging_config = LoggingConfig(level=effective_level)

    return ConverterConfig(
        inputs=inputs,
        outputs=outputs,
        conversion=conversion,
        logging=logging_config,
    )
