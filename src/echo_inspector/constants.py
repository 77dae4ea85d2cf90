"""
Global constants for echo-inspector.
"""

# Reserved query parameter overriding the request body
BODY_OVERRIDE_PARAM = "__body"

# Methods whose entity body is never read
BODYLESS_METHODS = frozenset({"GET", "HEAD"})

# Methods served by the echo routes
ECHO_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Client info fallbacks
DEFAULT_CLIENT_IP = "127.0.0.1"
DEFAULT_PROTOCOL = "http"
DEFAULT_HOST = "localhost"

# Header names consulted for client info
HEADER_REAL_IP = "x-real-ip"
HEADER_FORWARDED_FOR = "x-forwarded-for"
HEADER_FORWARDED_PROTO = "x-forwarded-proto"
HEADER_HOST = "host"
HEADER_USER_AGENT = "user-agent"

# Separator used when a header name repeats
HEADER_JOIN_SEPARATOR = ", "

# Raw route selector tokens
RAW_HEADERS_TOKEN = "h"
RAW_BODY_TOKEN = "b"

# Response content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_RAW = "text/plain; charset=utf-8"

# Server defaults
DEFAULT_SERVER_HOST = "127.0.0.1"
DEFAULT_SERVER_PORT = 8080

# Configuration
ENV_PREFIX = "ECHO_INSPECTOR_"

# Config file path handed to worker and reload processes
CONFIG_FILE_ENV = "ECHO_INSPECTOR_CONFIG"

# Common error codes
ERROR_EXECUTION = "execution_error"
ERROR_VALIDATION = "validation_error"
