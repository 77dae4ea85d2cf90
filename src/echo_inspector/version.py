"""
Version information for echo-inspector.
"""

# Version of the echo-inspector package
__version__ = "0.1.0"

# HTTP version reported for every inspected request
REPORTED_HTTP_VERSION = "1.1"

# Minimum supported Python version
MINIMUM_PYTHON_VERSION = "3.9"


def get_version_info():
    """Get comprehensive version information.

    Returns:
        dict: Dictionary with version details
    """
    return {
        "package_version": __version__,
        "reported_http_version": REPORTED_HTTP_VERSION,
        "minimum_python_version": MINIMUM_PYTHON_VERSION,
    }
