import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import random

from tilematch.events.bus import (EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID,
                                  EVENT_RESOLUTION_PHASE_CHANGED, EVENT_MATCH_FOUND, EVENT_REFILL_COMPLETED,
                                  EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED)
from tilematch.session import GameSession

# Print the event trace of a few player swaps on a seeded board.
session = GameSession.for_level(1, rng=random.Random(int(sys.argv[1]) if len(sys.argv) > 1 else 7))
bus = session.event_bus

def show(name):
    def handler(sender, **payload):
        if name == EVENT_RESOLUTION_PHASE_CHANGED:
            print(f'  phase {payload["previous"].name} -> {payload["phase"].name}')
        elif name == EVENT_MATCH_FOUND:
            runs = ', '.join(f'{m.symbol.value}x{m.length}' for m in payload['matches'])
            print(f'  match depth={payload["depth"]} cascade={payload["cascade"]}: {runs}')
        else:
            print(f'{name}', payload)
    return handler

for ev in [EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_RESOLUTION_PHASE_CHANGED,
           EVENT_MATCH_FOUND, EVENT_REFILL_COMPLETED, EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED]:
    bus.subscribe(ev, show(ev))

for row in session.get_board():
    print(' '.join(symbol.value[:2] for symbol in row))

for src, dst in session.find_valid_swaps()[:3]:
    print('--- swap', src, dst)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)

print('--- non-adjacent swap')
bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(2, 0))
