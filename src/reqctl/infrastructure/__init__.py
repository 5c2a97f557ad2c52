"""Infrastructure layer — document parsing and template loading.

Infrastructure may import from the domain layer, never from services or commands.
"""
