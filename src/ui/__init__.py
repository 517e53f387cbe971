"""NiceGUI interface - thin visualization layer for the chat shell.

Responsibilities:
    - Session sidebar with new, switch and delete
    - Message list of the active session
    - Auto-growing composer with the empty-input hint
    - Dark/light theme toggle

Contains no business logic. Renders ChatShell state and forwards events to it.
"""
