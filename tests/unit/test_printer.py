"""
Unit tests for the PHP source printer.
"""

from cml_php.api.generators.printer import (
    ImportRegistry,
    format_docblock,
    format_method,
    format_type,
    print_file,
)
from cml_php.lib.php_types import PhpClass, PhpEnum, PhpFile, PhpMethod


class TestImportRegistry:
    """Test `use` collection and short-name clash handling."""

    def test_namespaced_class_is_imported(self):
        imports = ImportRegistry("App\\Models")

        assert imports.name("Doctrine\\ORM\\Mapping\\Entity") == "Entity"
        assert imports.statements == ["Doctrine\\ORM\\Mapping\\Entity"]

    def test_same_namespace_prints_short_without_import(self):
        imports = ImportRegistry("App\\Models")

        assert imports.name("App\\Models\\Money") == "Money"
        assert imports.statements == []

    def test_bare_name_unchanged(self):
        assert ImportRegistry("App").name("OrderLine") == "OrderLine"

    def test_clash_with_reserved_name_is_fully_qualified(self):
        imports = ImportRegistry("App\\Models", reserved=["Collection"])

        assert imports.name("Doctrine\\Common\\Collections\\Collection") == "\\Doctrine\\Common\\Collections\\Collection"
        assert imports.statements == []

    def test_clash_between_imports(self):
        imports = ImportRegistry("App\\Models")

        assert imports.name("Doctrine\\ORM\\Mapping\\Entity") == "Entity"
        assert imports.name("Other\\Entity") == "\\Other\\Entity"
        assert imports.name("Doctrine\\ORM\\Mapping\\Entity") == "Entity"

    def test_statements_sorted(self):
        imports = ImportRegistry("App")
        imports.name("Doctrine\\ORM\\Mapping\\Table")
        imports.name("Doctrine\\ORM\\Mapping\\Column")

        assert imports.statements == ["Doctrine\\ORM\\Mapping\\Column", "Doctrine\\ORM\\Mapping\\Table"]


class TestFormatting:
    """Test type, docblock and method formatting."""

    def test_format_type(self):
        imports = ImportRegistry("App")

        assert format_type("string", imports) == "string"
        assert format_type("string", imports, nullable=True) == "?string"
        assert format_type("mixed", imports, nullable=True) == "mixed"
        assert format_type("", imports) == "mixed"
        assert format_type("\\DateTime", imports, nullable=True) == "?\\DateTime"
        assert format_type("Money", imports, nullable=True) == "?Money"

    def test_format_docblock(self):
        assert format_docblock([]) == []
        assert format_docblock(["@var int"]) == ["/** @var int */"]
        assert format_docblock(["@param int $a", "@param int $b"]) == [
            "/**",
            " * @param int $a",
            " * @param int $b",
            " */",
        ]

    def test_inline_signature(self):
        method = PhpMethod(name="setName", return_type="self", body=["$this->name = $name;", "", "return $this;"])
        method.add_parameter("name", "string")

        assert format_method(method, ImportRegistry("App")) == [
            "public function setName(string $name): self",
            "{",
            "    $this->name = $name;",
            "",
            "    return $this;",
            "}",
        ]

    def test_promoted_parameters_wrap(self):
        method = PhpMethod(name="__construct")
        param = method.add_parameter("amount", "float", promoted=True)
        param.readonly = True
        method.add_parameter("currency", "string", promoted=True)

        assert format_method(method, ImportRegistry("App")) == [
            "public function __construct(",
            "    private readonly float $amount,",
            "    private string $currency,",
            ") {",
            "}",
        ]

    def test_long_signature_wraps(self):
        method = PhpMethod(name="__construct")
        for i in range(8):
            method.add_parameter(f"someRatherLongParameterName{i}", "string")

        lines = format_method(method, ImportRegistry("App"))
        assert lines[0] == "public function __construct("
        assert lines[-2] == ") {"


class TestPrintFile:
    """Test complete file rendering."""

    def test_enum_file(self):
        php_enum = PhpEnum(name="Status")
        php_enum.add_case("ACTIVE", "ACTIVE")
        php_enum.add_case("PENDING_REVIEW", "PENDING_REVIEW")

        assert print_file(PhpFile(namespace="App\\Models", declaration=php_enum)) == (
            "<?php\n"
            "\n"
            "declare(strict_types=1);\n"
            "\n"
            "namespace App\\Models;\n"
            "\n"
            "enum Status: string\n"
            "{\n"
            "    case ACTIVE = 'ACTIVE';\n"
            "    case PENDING_REVIEW = 'PENDING_REVIEW';\n"
            "}\n"
        )

    def test_class_file(self):
        php_class = PhpClass(name="Money", final=True)
        php_class.add_property("amount", "float")
        php_class.add_property("currency", "string")
        getter = php_class.add_method("getAmount")
        getter.return_type = "float"
        getter.body = ["return $this->amount;"]

        assert print_file(PhpFile(namespace="App\\Models", declaration=php_class)) == (
            "<?php\n"
            "\n"
            "declare(strict_types=1);\n"
            "\n"
            "namespace App\\Models;\n"
            "\n"
            "final class Money\n"
            "{\n"
            "    private float $amount;\n"
            "    private string $currency;\n"
            "\n"
            "    public function getAmount(): float\n"
            "    {\n"
            "        return $this->amount;\n"
            "    }\n"
            "}\n"
        )

    def test_uses_and_attributes(self):
        php_class = PhpClass(name="Order")
        php_class.add_attribute("Doctrine\\ORM\\Mapping\\Entity")
        prop = php_class.add_property("id", "int")
        prop.add_attribute("Doctrine\\ORM\\Mapping\\Column", ["type: 'integer'"])

        content = print_file(PhpFile(namespace="App\\Models", declaration=php_class))

        assert "use Doctrine\\ORM\\Mapping\\Column;\nuse Doctrine\\ORM\\Mapping\\Entity;\n" in content
        assert "#[Entity]\nclass Order\n{" in content
        assert "    #[Column(type: 'integer')]\n    private int $id;\n" in content

    def test_class_named_like_import_uses_fqn(self):
        php_class = PhpClass(name="Entity")
        php_class.add_attribute("Doctrine\\ORM\\Mapping\\Entity")

        content = print_file(PhpFile(namespace="App\\Models", declaration=php_class))

        assert "#[\\Doctrine\\ORM\\Mapping\\Entity]" in content
        assert "use Doctrine" not in content

    def test_enum_value_quotes_escaped(self):
        php_enum = PhpEnum(name="Quote")
        php_enum.add_case("IT_S", "it's")

        content = print_file(PhpFile(namespace="App", declaration=php_enum))
        assert "case IT_S = 'it\\'s';" in content
