"""Service layer: administrative operations returning ServiceResult.

Services may import from domain and infrastructure layers.
They must never import from commands, output, or server.
"""
