#!/usr/bin/env python3
"""
AWS CDK App for the Character Merge API.
"""
import os
import json
from aws_cdk import App, Environment
from stacks.merge_api_stack import MergeApiStack

app = App()

# Get environment from context (default to dev)
env_name = app.node.try_get_context("env") or app.node.try_get_context("environment") or "dev"

# Load environment-specific configuration
config_path = os.path.join(os.path.dirname(__file__), "config", f"{env_name}.json")
with open(config_path, "r") as f:
    config = json.load(f)

# The signing secret is never committed to the config files
jwt_secret = app.node.try_get_context("jwtSecret") or os.environ.get("JWT_SECRET")
if not jwt_secret:
    raise ValueError("Provide the JWT secret with -c jwtSecret=... or the JWT_SECRET environment variable")

env = Environment(
    account=config.get("account"),
    region=config.get("region", "us-east-1")
)

MergeApiStack(
    app,
    f"CharacterMergeApi-{env_name}",
    env=env,
    config=config,
    env_name=env_name,
    jwt_secret=jwt_secret,
)

app.synth()
