from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)

    def has_subscribers(self, name: str) -> bool:
        sig = self._signals.get(name)
        return bool(sig and sig.receivers)


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_BOARD_GENERATED = "board_generated"          # payload: width=int, height=int, mode=str
EVENT_BOARD_REBUILD_REQUEST = "board_rebuild_request"  # payload: mode=str, target_length=int|None
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(x,y)]


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(x,y), dst=(x,y)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(x,y), dst=(x,y)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(x,y), dst=(x,y), reason=str
EVENT_TILE_SWAP_REVERTED = "tile_swap_reverted"    # payload: src=(x,y), dst=(x,y)


# ============================================================================
# MATCH RESOLUTION
# ============================================================================
EVENT_RESOLUTION_PHASE_CHANGED = "resolution_phase_changed"  # payload: previous=ResolutionPhase, phase=ResolutionPhase, operation=str|None
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=list[Match], positions=[(x,y),...], depth=int, cascade=bool
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(x,y),...], types=[(x,y,Symbol),...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(x,y),...], weighted=bool
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(x,y),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score=int, operation=str
EVENT_SCORE_CHANGED = "score_changed"              # payload: delta=int, operation=str


# ============================================================================
# POWER-UPS
# ============================================================================
EVENT_POWER_UP_REQUEST = "power_up_request"                    # payload: power_up=PowerUpType, target=(x,y), second_target=(x,y)|None
EVENT_POWER_UP_USED = "power_up_used"                          # payload: power_up=PowerUpType, target=(x,y), remaining=int
EVENT_POWER_UP_UNAVAILABLE = "power_up_unavailable"            # payload: power_up=PowerUpType, reason=str
EVENT_POWER_UP_INVENTORY_CHANGED = "power_up_inventory_changed"  # payload: power_up=PowerUpType, count=int, delta=int


# ============================================================================
# LEVELS
# ============================================================================
EVENT_LEVEL_CHANGED = "level_changed"              # payload: level=int, privileged_symbol=Symbol|None, promoted_power_up=PowerUpType|None
