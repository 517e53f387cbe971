"""Test package for the Thespis chat shell.

Structure:
    - unit/: Store, models, repository, composer, shell and config in isolation
    - integration/: File persistence across restarts, real asyncio timers, HTTP host

Time is faked with a virtual-clock scheduler in unit tests. Leverages pytest
with pytest-check for soft assertions.
"""
