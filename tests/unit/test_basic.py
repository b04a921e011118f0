"""
Basic tests for docroles package structure.

These tests verify the public API is importable and
basic configuration works correctly.
"""


class TestImports:
    """Test that the public API is importable."""

    def test_import_package(self):
        """Can import the main package."""
        import docroles

        assert docroles.__version__ == "0.1.0"

    def test_import_classify_function(self):
        """Can import the main classify function."""
        from docroles import classify

        assert callable(classify)

    def test_import_config(self):
        """Can import configuration class."""
        from docroles import ClassifierConfig

        config = ClassifierConfig()
        assert config.detect_images is True

    def test_import_core_types(self):
        """Can import core data types."""
        from docroles import Role, TextElement

        assert Role.HEADING.value == "heading"
        assert TextElement(text="x").text == "x"

    def test_import_exceptions(self):
        """Can import exception classes."""
        from docroles import (
            ConfigurationError,
            DocRolesError,
            InvalidElementError,
            InvalidMetricsError,
        )

        # Verify inheritance
        assert issubclass(InvalidElementError, DocRolesError)
        assert issubclass(InvalidMetricsError, DocRolesError)
        assert issubclass(ConfigurationError, DocRolesError)
        assert issubclass(ConfigurationError, ValueError)

    def test_all_exports_exist(self):
        """Everything in __all__ is an attribute of the package."""
        import docroles

        for name in docroles.__all__:
            assert hasattr(docroles, name), name
