"""
navaccess.api

Read-only HTTP surface over an `AccessRegistry`.

Responsibilities:
- FastAPI app factory and router modules.
- Dependency wiring for settings, registry and the host-supplied principal.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing here enforces access; enforcement stays in the host's request pipeline.
