"""filament-modular — split generated Filament resources into modular files."""

__version__ = "0.1.0"
