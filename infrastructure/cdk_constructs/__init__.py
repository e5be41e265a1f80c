"""Reusable CDK Constructs."""

from .lambda_function import LambdaFunction, retention_for_days

__all__ = [
    "LambdaFunction",
    "retention_for_days",
]
