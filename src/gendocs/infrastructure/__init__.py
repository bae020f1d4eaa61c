"""Infrastructure layer — remote API access and local project files.

This layer depends on stdlib and third-party libs (httpx, pydantic).
It must never import from services, commands, or output.
The service layer bridges between domain models and infrastructure.
"""
