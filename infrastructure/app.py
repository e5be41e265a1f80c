#!/usr/bin/env python3
"""
CDK Application for the HTTP API sample.

Deploys a Cognito user pool, a JWT-authorized API Gateway HTTP API and the
Lambda function behind it.

Usage:
    cdk synth
    ENV=prod cdk deploy
    cdk destroy

Environment: ENV=prod selects the prod context in cdk.json, anything else dev.
"""

import logging
import os
import sys

from aws_cdk import App, Environment, Tags

from stack_config import ConfigError, load_context
from stacks.http_api_sample_stack import HttpApiSampleStack

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

# Initialize CDK app
app = App()

try:
    context_key, context = load_context(app)
except ConfigError as e:
    logger.error(f"Synthesis aborted: {e}")
    sys.exit(1)

# Environment-agnostic unless the CLI supplies account and region
account_id = os.getenv("CDK_DEFAULT_ACCOUNT")
region = os.getenv("CDK_DEFAULT_REGION")
aws_env = Environment(account=account_id, region=region) if account_id and region else None

logger.info(f"Deploying context: {context_key}")
logger.info(f"AWS Account: {account_id or 'unresolved'}")
logger.info(f"AWS Region: {region or 'unresolved'}")

HttpApiSampleStack(
    app,
    "HttpApiSampleStack",
    context=context,
    env_name=context_key,
    env=aws_env,
    description=f"HTTP API sample stack - {context_key}",
)

# ============================================================================
# Add Common Tags
# ============================================================================

Tags.of(app).add("Environment", context_key)
Tags.of(app).add("Project", "http-api-sample")
Tags.of(app).add("ManagedBy", "CDK")

app.synth()
