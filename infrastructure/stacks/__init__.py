"""CDK Stacks for the HTTP API sample."""

from .http_api_sample_stack import HttpApiSampleStack

__all__ = [
    "HttpApiSampleStack",
]
