# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains all Django configuration: settings, root URLs and
# the ASGI/WSGI applications.
# =============================================================================
