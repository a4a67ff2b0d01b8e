"""View rendering module.

Template discovery, the template cache and the render pipeline live here,
separate from the HTTP routers that call them.
"""
