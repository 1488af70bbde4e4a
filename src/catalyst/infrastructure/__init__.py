"""Infrastructure layer — filesystem, workspace containers, templates.

This layer depends on stdlib, third-party libs (Jinja2) and the domain
error types. It must never import from services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
