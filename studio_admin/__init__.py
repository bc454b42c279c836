"""Studio Admin Backend Package.

To use the Flask app:
    from studio_admin.flask_app import create_app

To deprovision a user outside Flask:
    from studio_admin.core import DeprovisioningService
"""
# Note: We don't import flask_app by default so that the core package can be
# used without loading settings from the environment
