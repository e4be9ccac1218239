"""Infrastructure layer — site layout, file discovery and I/O, templates.

Depends on stdlib, third-party libs (Jinja2), and the domain layer's pure
parsing utilities. It must never import from services, commands, or output.
"""
