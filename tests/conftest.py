"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins APP_ENV to testing so a developer's .env.development is never
loaded during tests.
"""

import os

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"

# Defaults for settings every test might read
os.environ.setdefault("CRPT_BASE_URL", "https://registry.test")
os.environ.setdefault("GATE_REQUEST_LIMIT", "10")
os.environ.setdefault("GATE_WINDOW_SECONDS", "1.0")
os.environ.setdefault("GATE_CLOSE_GRACE_SECONDS", "5.0")
