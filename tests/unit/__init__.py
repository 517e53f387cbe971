"""Unit tests for individual components in isolation.

Coverage:
    - storage/: Key-value backends and validated JSON decoding
    - models/: Session shape validation and title derivation
    - chat/: Repository index rules, composer hint timer and height, shell events

Uses a fake scheduler and stub measurer instead of a browser or event loop.
"""
