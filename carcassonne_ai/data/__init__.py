"""Static game data shipped with the package."""

from .tile_loader import load_catalogue, load_start_tile, standard_tiles

__all__ = ["load_catalogue", "load_start_tile", "standard_tiles"]
