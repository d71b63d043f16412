"""
Unit tests for shared errors, settings and logging helpers.
"""

import pytest
import structlog
from pydantic import ValidationError

from shared.config import RulebookSettings, get_settings
from shared.errors import (
    CyclicReferenceError,
    ErrorResponse,
    InvalidArgumentError,
    InvalidOperandCountError,
    InvalidOperationError,
    RulebookException,
    TypeMismatchError,
    UndefinedVariableError,
)
from shared.logging import (
    add_evaluation_context,
    add_service_context,
    configure_logging,
    evaluation_id_var,
    set_evaluation_id,
)


class TestErrors:
    """Test cases for the error taxonomy."""

    @pytest.mark.parametrize("error,code", [
        (UndefinedVariableError("x"), "UNDEFINED_VARIABLE"),
        (TypeMismatchError("a", 1), "TYPE_MISMATCH"),
        (InvalidOperandCountError("LogicalNot", "1", 2), "INVALID_OPERAND_COUNT"),
        (InvalidOperationError(), "INVALID_OPERATION"),
        (InvalidArgumentError(), "INVALID_ARGUMENT"),
        (CyclicReferenceError("a", ["a", "a"]), "CYCLIC_REFERENCE"),
    ])
    def test_error_codes(self, error, code):
        """Test every error carries its code and shares the base class."""
        assert isinstance(error, RulebookException)
        assert error.code == code

    def test_to_response(self):
        """Test conversion to the error response model."""
        response = InvalidOperandCountError("LogicalNot", "1", 2).to_response()

        assert isinstance(response, ErrorResponse)
        assert response.code == "INVALID_OPERAND_COUNT"
        assert response.message == "LogicalNot takes 1 operand(s), 2 given"
        assert response.details == {"operator": "LogicalNot", "expected": "1", "received": 2}

    def test_builtin_bases(self):
        """Test errors that also behave as builtin exceptions."""
        assert isinstance(TypeMismatchError(None, 1), TypeError)
        assert isinstance(InvalidArgumentError(), ValueError)

    def test_anonymous_cycle_message(self):
        """Test cycles through unnamed variables."""
        error = CyclicReferenceError(None)

        assert "<anonymous>" in error.message
        assert error.details == {"name": None, "chain": []}


class TestSettings:
    """Test cases for RulebookSettings."""

    @pytest.fixture(autouse=True)
    def clear_settings_cache(self):
        """Reset the cached settings around each test."""
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_defaults(self, monkeypatch):
        """Test default settings."""
        for name in ("RULEBOOK_LOG_LEVEL", "RULEBOOK_LOG_FORMAT", "RULEBOOK_TRACE_EVALUATIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = RulebookSettings()

        assert settings.log_level == "info"
        assert settings.log_format == "json"
        assert settings.trace_evaluations is False

    def test_environment_overrides(self, monkeypatch):
        """Test RULEBOOK_* variables."""
        monkeypatch.setenv("RULEBOOK_LOG_LEVEL", "debug")
        monkeypatch.setenv("RULEBOOK_TRACE_EVALUATIONS", "1")

        settings = get_settings()

        assert settings.log_level == "debug"
        assert settings.trace_evaluations is True
        assert get_settings() is settings

    def test_invalid_log_format(self, monkeypatch):
        """Test log_format validation."""
        monkeypatch.setenv("RULEBOOK_LOG_FORMAT", "xml")

        with pytest.raises(ValidationError):
            RulebookSettings()


class TestLogging:
    """Test cases for logging helpers."""

    def test_add_service_context(self):
        """Test the service name is taken from the logger name."""
        event = add_service_context(None, "info", {"logger": "rulebook.ruleset"})

        assert event["service"] == "rulebook"

    def test_add_evaluation_context(self):
        """Test the evaluation id processor."""
        token = evaluation_id_var.set("eval-1")
        try:
            event = add_evaluation_context(None, "info", {})
        finally:
            evaluation_id_var.reset(token)

        assert event["evaluation_id"] == "eval-1"
        assert "evaluation_id" not in add_evaluation_context(None, "info", {})

    def test_set_evaluation_id(self):
        """Test generated and explicit evaluation ids."""
        try:
            generated = set_evaluation_id()
            assert evaluation_id_var.get() == generated

            assert set_evaluation_id("explicit") == "explicit"
            assert evaluation_id_var.get() == "explicit"
        finally:
            evaluation_id_var.set(None)

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_configure_logging(self, log_format):
        """Test structlog and stdlib logging are configured."""
        try:
            configure_logging("rulebook", "debug", log_format)

            config = structlog.get_config()
            assert config["logger_factory"].__class__ is structlog.stdlib.LoggerFactory
            assert add_evaluation_context in config["processors"]
        finally:
            structlog.reset_defaults()

    def test_configure_logging_uses_settings(self, monkeypatch):
        """Test format falls back to RULEBOOK_LOG_FORMAT."""
        monkeypatch.setenv("RULEBOOK_LOG_FORMAT", "console")
        get_settings.cache_clear()
        try:
            configure_logging()

            renderer = structlog.get_config()["processors"][-1]
            assert isinstance(renderer, structlog.dev.ConsoleRenderer)
        finally:
            structlog.reset_defaults()
            get_settings.cache_clear()
