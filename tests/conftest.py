"""
Pytest configuration and shared fixtures for the cml_php test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from cml_php.config import GeneratorConfig
from cml_php.language import build_model, build_model_str


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root):
    """Return the directory holding the example CML models."""
    return project_root / "examples" / "cml"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated code output."""
    temp_dir = tempfile.mkdtemp(prefix="cml_php_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def write_cml_file(temp_output_dir):
    """Factory fixture to write CML content to a temporary file."""
    def _write(content: str, filename: str = "test.cml") -> Path:
        file_path = temp_output_dir / filename
        file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def build_cml_model(write_cml_file):
    """Factory fixture to build a model from CML content via a file."""
    def _build(content: str):
        return build_model(str(write_cml_file(content)))
    return _build


@pytest.fixture
def make_config():
    """Factory fixture for generator configurations."""
    def _make(**options) -> GeneratorConfig:
        return GeneratorConfig(**options)
    return _make


# Test data fixtures for common scenarios

@pytest.fixture
def order_cml():
    """Single aggregate with a root entity holding a relation collection."""
    return """
BoundedContext Sales {
  Aggregate Order {
    Entity Order {
      aggregateRoot
      - Set<OrderLine> lines
    }
  }
}
"""


@pytest.fixture
def sales_cml():
    """Aggregate with an enum, value objects and entities."""
    return """
// Sales context
BoundedContext Sales {
  Aggregate Order {
    Entity Order {
      aggregateRoot
      Long id
      String orderNumber
      DateTime placedAt
      OrderStatus status
      - Set<OrderLine> lines
      - Customer customer
      nullable String note
      List<String> tags
    }

    Entity OrderLine {
      Integer quantity
      Money price
    }

    ValueObject Money {
      BigDecimal amount
      String currency
    }

    enum OrderStatus {
      Active, Inactive, pending-review
    }
  }
}
"""


@pytest.fixture
def sales_model(sales_cml):
    return build_model_str(sales_cml)


@pytest.fixture
def address_cml():
    """Value object with one nullable property."""
    return """
BoundedContext Shipping {
  Aggregate Shipment {
    ValueObject Address {
      String street
      String city
      nullable String state
    }
  }
}
"""
