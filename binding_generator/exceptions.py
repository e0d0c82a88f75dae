"""
Custom exception hierarchy for the binding generator.

This module provides an exception system with rich context and error
recovery guidance for backend authors and users.
"""

from typing import Dict, Any, Optional, List


class BindingGeneratorError(Exception):
    """
    Base exception for all binding generator errors.

    Provides rich context and error recovery guidance.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        error_code: Optional[str] = None
    ):
        """
        Initialize the exception with context and recovery suggestions.

        Args:
            message: Human-readable error message
            context: Additional context about where/why the error occurred
            suggestions: List of potential solutions or next steps
            error_code: Unique error code for programmatic handling
        """
        super().__init__(message)
        self.context = context or {}
        self.suggestions = suggestions or []
        self.error_code = error_code

    def __str__(self) -> str:
        """Return formatted error message with context."""
        lines = [super().__str__()]

        if self.error_code:
            lines.append(f"Error Code: {self.error_code}")

        if self.context:
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestions:
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  • {suggestion}")

        return "\n".join(lines)


class ConfigurationError(BindingGeneratorError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, config_file: str = None, **kwargs):
        context = kwargs.get('context', {})
        if config_file:
            context['config_file'] = config_file

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the configuration file syntax",
                "Verify all required fields are present",
                "Check that every module has a library_name",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="CONFIG_ERROR"
        )


class ASTLoadError(BindingGeneratorError):
    """Raised when a translation unit description cannot be loaded."""

    def __init__(self, message: str, source: str = None, **kwargs):
        context = kwargs.get('context', {})
        if source:
            context['source'] = source

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Check the unit description is valid YAML",
                "Verify every declaration has a 'kind' and a 'name'",
                "Check unit paths are relative to the configuration file",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="AST_LOAD_ERROR"
        )


class CodeGenerationError(BindingGeneratorError):
    """Raised when generating output for a unit or module fails."""

    def __init__(self, message: str, backend: str = None, unit: str = None, **kwargs):
        context = kwargs.get('context', {})
        if backend:
            context['backend'] = backend
        if unit:
            context['unit'] = unit

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Run with --verbose to see which unit failed",
                "Try generating one module at a time",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code=kwargs.get('error_code', "CODE_GENERATION_ERROR")
        )


class BackendContractError(CodeGenerationError):
    """Raised when a backend returns a template count its aggregation mode forbids."""

    def __init__(self, message: str, expected: str = None, actual: int = None, **kwargs):
        context = kwargs.pop('context', {})
        if expected is not None:
            context['expected_templates'] = expected
        if actual is not None:
            context['actual_templates'] = actual

        suggestions = kwargs.pop('suggestions', [])
        if not suggestions:
            suggestions = [
                "Single-file backends must collapse a module into exactly one template",
                "Check the backend's generate_units implementation",
            ]
        kwargs.setdefault('error_code', "BACKEND_CONTRACT_ERROR")

        super().__init__(message, context=context, suggestions=suggestions, **kwargs)


class EmptyOutputError(BackendContractError):
    """Raised when a backend produces no templates for a unit and the policy is 'raise'."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault('expected', "at least 1")
        kwargs.setdefault('actual', 0)
        kwargs.setdefault('suggestions', [
            "Set empty_output_policy to 'skip' to continue past such units",
            "Check whether every declaration in the unit was ignored",
        ])
        kwargs.setdefault('error_code', "EMPTY_OUTPUT_ERROR")
        super().__init__(message, **kwargs)


class TemplateError(BindingGeneratorError):
    """Raised when a template is misused or fails to render."""

    def __init__(self, message: str, template: str = None, **kwargs):
        context = kwargs.get('context', {})
        if template:
            context['template'] = template

        suggestions = kwargs.get('suggestions', [])
        if not suggestions:
            suggestions = [
                "Templates must be processed exactly once before reading their text",
                "Check the template file exists in the templates directory",
            ]

        super().__init__(
            message,
            context=context,
            suggestions=suggestions,
            error_code="TEMPLATE_ERROR"
        )

