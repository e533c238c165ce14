import random
from typing import final, override

from signgrid.models import MultiSeries, StatusCode, ValidatorSeries
from signgrid.source.source_base import StatusSource


@final
class MockSource(StatusSource):
    """Deterministic rolling window of fake signing outcomes.

    Each fetch advances the chain by one height. Proposers rotate round-robin,
    the rest of the outcomes come from a seeded RNG so runs are reproducible.
    """

    def __init__(
        self,
        n_validators: int = 8,
        n_blocks: int = 120,
        seed: int = 0,
        miss_rate: float = 0.04,
        no_data_every: int = 97,
    ):
        self.n_validators = n_validators
        self.n_blocks = n_blocks
        self.seed = seed
        self.miss_rate = miss_rate
        self.no_data_every = no_data_every
        self.height = n_blocks

    @override
    def fetch(self) -> MultiSeries:
        first = self.height - self.n_blocks + 1
        series = [
            ValidatorSeries(
                name=f"validator-{v:02d}",
                blocks=[self._status(v, h) for h in range(first, self.height + 1)],
            )
            for v in range(self.n_validators)
        ]
        self.height += 1
        return MultiSeries(status=series)

    def _status(self, validator: int, height: int) -> int:
        if self.no_data_every and height % self.no_data_every == 0:
            return StatusCode.NO_DATA
        if height % self.n_validators == validator:
            return StatusCode.PROPOSED

        rng = random.Random(self.seed * 1_000_003 + height * 1009 + validator)
        roll = rng.random()
        if roll < self.miss_rate:
            return StatusCode.MISSED
        if roll < self.miss_rate * 1.5:
            return StatusCode.MISSED_PREVOTE
        if roll < self.miss_rate * 2:
            return StatusCode.MISSED_PRECOMMIT
        return StatusCode.SIGNED
