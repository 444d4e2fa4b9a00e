"""
Validation results, messages and the built-in field validators.

Validators live in ``rev_models.validation.validators``; messages in
``rev_models.validation.messages``.
"""

from rev_models.validation.result import ModelValidationResult, ValidationErrorRecord

__all__ = ["ModelValidationResult", "ValidationErrorRecord"]
