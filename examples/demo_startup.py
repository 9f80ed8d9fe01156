#!/usr/bin/env python3
"""
Startup demo for safe-env-lite.

Declares the variables a small web service needs, validates them once and
exits with the aggregated report if anything is wrong.

To run this demo:
1. Install the package: pip install -e .
2. Run: PORT=8080 NODE_ENV=development DATABASE_URL=postgres://localhost/app python demo_startup.py
"""

import logging
import sys

from safe_env_lite import create_env, EnvValidationError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SCHEMA = {
    "PORT": {"type": "number", "default": 3000, "description": "HTTP listen port"},
    "NODE_ENV": ["development", "test", "production"],
    "DEBUG": {"type": "boolean", "default": False},
    "DATABASE_URL": {"type": "string", "required": True},
    "API_KEY": {"type": "string", "nullable": True},
}


def main():
    try:
        env = create_env(SCHEMA)
    except EnvValidationError as e:
        print(e, file=sys.stderr)
        return 1

    logger.info(f"Starting on port {env.PORT} in {env.NODE_ENV} mode (debug={env.DEBUG})")
    if env.API_KEY is None:
        logger.info("No API key configured, external calls disabled")
    return 0


if __name__ == "__main__":
    sys.exit(main())
