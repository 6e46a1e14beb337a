"""
navaccess.api.routers

Router modules mounted by `navaccess.api.app.create_app`.
"""

# Package marker.
