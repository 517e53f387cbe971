"""Integration tests for components working together as a system.

Coverage:
    - Sessions persisted to a JSON file and reloaded by a new shell
    - Hint expiry on a real asyncio loop
    - FastAPI health route over ASGI transport
"""
