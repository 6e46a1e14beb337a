"""
navaccess.observability

Structured logging for the resolver and its HTTP surface.
"""

# Package marker.
