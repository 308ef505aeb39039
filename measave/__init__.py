"""Reading and inspecting Mass Effect: Andromeda save files."""

__version__ = "0.0.1"