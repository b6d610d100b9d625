"""Closed alphabet of tile symbols."""
from enum import Enum


class Symbol(Enum):
    """Tile kinds that can occupy a board cell."""
    LEAF = "leaf"
    SNOWFLAKE = "snowflake"
    FIRE = "fire"
    RAINDROP = "raindrop"
    LIGHTNING = "lightning"
