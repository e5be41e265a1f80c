"""Tests for the CDK application entry point."""

import json
import os
import subprocess
import sys
from pathlib import Path

INFRASTRUCTURE_DIR = Path(__file__).resolve().parents[2]


def run_app(env_value, context):
    """Run app.py the way `cdk synth` does, with context passed via CDK_CONTEXT_JSON."""
    env = dict(os.environ)
    env["ENV"] = env_value
    env["CDK_CONTEXT_JSON"] = json.dumps(context)
    env.pop("CDK_DEFAULT_ACCOUNT", None)
    env.pop("CDK_DEFAULT_REGION", None)
    return subprocess.run(
        [sys.executable, "app.py"],
        cwd=INFRASTRUCTURE_DIR,
        env=env,
        capture_output=True,
        text=True,
        timeout=300,
    )


def test_app_aborts_when_context_block_is_missing():
    """Test that synthesis exits with status 1 and names the missing context."""
    context = {
        "dev": {
            "cognito": {
                "domainPrefix": "sample-test",
                "callbackUrls": ["https://example.com/callback"],
            },
        },
    }

    result = run_app("prod", context)

    assert result.returncode == 1
    assert "Synthesis aborted" in result.stderr
    assert "Context 'prod' not found" in result.stderr


def test_app_aborts_on_invalid_context():
    """Test that validation errors name the offending field."""
    context = {"dev": {"cognito": {"callbackUrls": ["https://example.com/callback"]}}}

    result = run_app("dev", context)

    assert result.returncode == 1
    assert "cognito.domainPrefix" in result.stderr
