"""Reusable Lambda function construct with an explicit log group."""

from aws_cdk import (
    Duration,
    RemovalPolicy,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from constructs import Construct
from typing import Dict, Optional


RETENTION_BY_DAYS = {
    1: logs.RetentionDays.ONE_DAY,
    3: logs.RetentionDays.THREE_DAYS,
    5: logs.RetentionDays.FIVE_DAYS,
    7: logs.RetentionDays.ONE_WEEK,
    14: logs.RetentionDays.TWO_WEEKS,
    30: logs.RetentionDays.ONE_MONTH,
    60: logs.RetentionDays.TWO_MONTHS,
    90: logs.RetentionDays.THREE_MONTHS,
    120: logs.RetentionDays.FOUR_MONTHS,
    150: logs.RetentionDays.FIVE_MONTHS,
    180: logs.RetentionDays.SIX_MONTHS,
    365: logs.RetentionDays.ONE_YEAR,
}


def retention_for_days(days: int) -> logs.RetentionDays:
    """Convert integer days to RetentionDays enum."""
    try:
        return RETENTION_BY_DAYS[days]
    except KeyError:
        raise ValueError(
            f"Unsupported log retention: {days} days "
            f"(supported: {sorted(RETENTION_BY_DAYS)})"
        ) from None


class LambdaFunction(Construct):
    """
    Reusable Lambda function construct with standard configurations.

    Features:
    - Dedicated CloudWatch log group with configurable retention
      (no log-retention custom resource in the template)
    - Environment variables
    - Timeout and memory configuration
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        runtime: lambda_.Runtime = lambda_.Runtime.PYTHON_3_12,
        handler: str,
        code: lambda_.Code,
        timeout: Duration,
        memory_size: int = 128,
        environment: Optional[Dict[str, str]] = None,
        log_retention_days: int = 7,
        description: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize Lambda function construct.

        Args:
            scope: CDK scope
            construct_id: Construct identifier
            runtime: Lambda runtime
            handler: Function handler
            code: Lambda code
            timeout: Function timeout
            memory_size: Memory allocation in MB
            environment: Environment variables
            log_retention_days: CloudWatch log retention in days
            description: Function description
            **kwargs: Additional Lambda function properties
        """
        super().__init__(scope, construct_id)

        self.log_group = logs.LogGroup(
            self,
            "LogGroup",
            retention=retention_for_days(log_retention_days),
            removal_policy=RemovalPolicy.DESTROY,
        )

        self.function = lambda_.Function(
            self,
            "Function",
            runtime=runtime,
            handler=handler,
            code=code,
            timeout=timeout,
            memory_size=memory_size,
            environment=environment or {},
            description=description,
            log_group=self.log_group,
            **kwargs
        )

    @property
    def function_arn(self) -> str:
        """Get function ARN."""
        return self.function.function_arn

    @property
    def function_name(self) -> str:
        """Get function name."""
        return self.function.function_name
