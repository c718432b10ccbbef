from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined

PHP_TEMPLATES_DIR = Path(__file__).parent / "php"


def _php_string(value: str) -> str:
    """Escape a value for a single-quoted PHP string literal."""
    return str(value).replace("\\", "\\\\").replace("'", "\\'")


env = Environment(
    loader=FileSystemLoader(str(PHP_TEMPLATES_DIR)),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)

env.filters["php_string"] = _php_string
