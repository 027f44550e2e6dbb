"""
Kernel test configuration.

Kernel tests use MemoryFileStore and need no database or network.
Async tests run under pytest-asyncio auto mode (see pyproject.toml).
"""
