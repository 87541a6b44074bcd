"""Configuration for the GitHub CORS proxy.

Startup-only settings are configured here via environment variables.
They are read once; runtime code goes through settings.get_settings().
"""

import os

# Server settings (startup-only)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# Debug mode (enables auto-reload in development)
DEBUG = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")

# Root log level (DEBUG, INFO, WARNING, ...)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Secret first path segment every request must carry (e.g. /3lwqk/gh/...)
ACCESS_PREFIX = os.getenv("ACCESS_PREFIX", "/3lwqk")

# Segment after the access prefix that selects GitHub routing
ROUTING_PREFIX = os.getenv("ROUTING_PREFIX", "/gh/")

# Timeout for outbound fetches to GitHub, in seconds
UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "30"))

# Reject owner/repo/ref values outside [A-Za-z0-9_.-] (off: permissive matching)
ENFORCE_NAME_VALIDATION = os.getenv("ENFORCE_NAME_VALIDATION", "false").lower() in ("true", "1", "yes")
