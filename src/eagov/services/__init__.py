"""Service layer — governance operations returning ServiceResult.

Services may import from domain, config, infrastructure and governance.
They must never import from commands or output.
"""
