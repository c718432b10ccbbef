"""PHP backed enum generation from CML enumerations."""

from ...lib.model import CMLEnum
from ...lib.php_types import PhpEnum, PhpFile
from ..gen_logging import get_logger
from ..utils.naming import enum_case_name
from .printer import print_file

logger = get_logger(__name__)


def build_enum(enum_def: CMLEnum, final_name: str = None) -> PhpEnum:
    """
    Build a string-backed enum. Each label becomes one case; the case name and
    the backing value are both the normalized label (`pending-review` ->
    `PENDING_REVIEW = 'PENDING_REVIEW'`).
    """
    php_enum = PhpEnum(name=final_name or enum_def.name, backing_type="string")
    for value in enum_def.values:
        case = enum_case_name(value)
        php_enum.add_case(case, case)
    if not enum_def.values:
        logger.debug(f"  enum {enum_def.name} has no values")
    return php_enum


def generate_enum(enum_def: CMLEnum, namespace: str, final_name: str = None) -> str:
    return print_file(PhpFile(namespace=namespace, declaration=build_enum(enum_def, final_name)))
