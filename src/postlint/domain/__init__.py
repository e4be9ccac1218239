"""Domain layer — front matter, file names, Markdown scanning, lint rules.

This layer depends only on stdlib, pydantic, and ruamel.yaml.
It must never import from services, infrastructure, commands, or config.
"""
