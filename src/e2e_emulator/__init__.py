"""e2e-emulator — Android emulator helper for end-to-end test infrastructure.

Thin wrapper around the Android SDK tools with a strict layered architecture.
"""

from e2e_emulator.version import __version__

__all__: list[str] = ["__version__"]
