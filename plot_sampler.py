import random
import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

SRC_PATH = Path(__file__).parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from tilematch.components.level_context import LevelContext
from tilematch.components.symbol import Symbol
from tilematch.systems.symbol_sampler import SymbolSampler

DRAWS = 100_000


def draw_frequencies(sampler, context=None, cleared=()):
    """Empirical frequency of every symbol over DRAWS refill draws."""
    index = {symbol: i for i, symbol in enumerate(sampler.alphabet)}
    counts = np.zeros(len(sampler.alphabet))
    for _ in range(DRAWS):
        counts[index[sampler.draw(context, cleared=cleared)]] += 1
    return counts / DRAWS


sampler = SymbolSampler(list(Symbol), random.Random(2024))
context = LevelContext(level=1, privileged_symbol=Symbol.LEAF)
series = {
    "Uniform": draw_frequencies(sampler),
    "Privileged leaf (p=0.4)": draw_frequencies(sampler, context),
    "Leaf just cleared": draw_frequencies(sampler, context, cleared=(Symbol.LEAF,)),
}

labels = [symbol.value for symbol in sampler.alphabet]
positions = np.arange(len(labels))
width = 0.25

plt.figure(figsize=(8, 4))
for offset, (name, freqs) in enumerate(series.items()):
    plt.bar(positions + (offset - 1) * width, freqs, width, label=name)
plt.axhline(1 / len(labels), color="gray", linestyle=":", label="Uniform share")
plt.axhline(context.privileged_probability, color="gray", linestyle="--", label="Privileged share")
plt.xticks(positions, labels)
plt.ylabel("Draw frequency")
plt.title(f"Refill symbol distribution over {DRAWS:,} draws")
plt.legend()
plt.grid(True, axis="y")
plt.show()
