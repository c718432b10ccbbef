"""
Model builders for CML (Context Mapper Language) sources.

This module provides the main parse entry points. The line classifier,
property parser and scope-stack parser live in the parser/ package.
"""

from pathlib import Path

from cml_php.api.gen_logging import get_logger
from cml_php.lib.model import CMLModel
from cml_php.parser import parse_cml

logger = get_logger(__name__)


# ------------------------------------------------------------------------------
# Constants
CML_SUFFIX = ".cml"


# ------------------------------------------------------------------------------
# Public model builders

def build_model(model_path: str) -> CMLModel:
    """Parse a model from a file path."""
    model_file = Path(model_path).resolve()
    if not model_file.exists():
        raise FileNotFoundError(f"File not found: {model_file}")

    logger.debug(f"[PARSE] {model_file}")
    model = parse_cml(model_file.read_text(encoding="utf-8"))
    model.source_name = model_file.name
    return model


def build_model_str(model_str: str) -> CMLModel:
    """Parse a model from a string."""
    return parse_cml(model_str)


# ------------------------------------------------------------------------------
# Model element getters

def get_model_aggregates(model: CMLModel):
    return [agg for bc in model.bounded_contexts for agg in bc.aggregates]


def get_model_entities(model: CMLModel):
    return [e for agg in get_model_aggregates(model) for e in agg.entities]


def get_model_value_objects(model: CMLModel):
    return [vo for agg in get_model_aggregates(model) for vo in agg.value_objects]


def get_model_enums(model: CMLModel):
    return [en for agg in get_model_aggregates(model) for en in agg.enums]


def count_units(model: CMLModel) -> int:
    """Number of files a generation run produces for this model."""
    return (
        len(get_model_enums(model))
        + len(get_model_value_objects(model))
        + len(get_model_entities(model))
    )
