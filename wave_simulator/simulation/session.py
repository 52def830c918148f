"""
Market session: the round loop that settles trades and prices.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..config.simulation_config import SimulationConfig
from ..core.models import InstrumentDefinition, PriceSnapshot, RoundReport, TradeRequest
from ..data.loaders import InstrumentLoader, DEFAULT_CATALOG
from ..market.coordinator import RoundCoordinator
from ..market.price_engine import PriceEngine
from ..portfolio.ledger import PositionLedger
from ..trading.engine import TradeEngine

Strategy = Callable[['MarketSession'], Iterable[TradeRequest]]


class MarketSession:
    """Runs rounds of act -> settle -> report over a random set of instruments.

    Each round the submitted trade requests fill at the current prices, then
    every price engine advances exactly once and each holder is revalued
    against the new snapshot. The session seed fixes instrument selection
    and every engine's random stream.
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 catalog: Optional[Sequence[InstrumentDefinition]] = None):
        self.config = config if config is not None else SimulationConfig()
        self.config.validate()
        self.logger = logging.getLogger(__name__)

        if catalog is None:
            catalog = (InstrumentLoader.load_csv(self.config.catalog_path)
                       if self.config.catalog_path else DEFAULT_CATALOG)
        self.catalog = list(catalog)

        self.coordinator = RoundCoordinator()
        for engine in self._build_engines():
            self.coordinator.register(engine)

        self.trade_engine = TradeEngine(self.coordinator)
        for holder_id in self.config.holders:
            self.trade_engine.open_account(holder_id, self.config.initial_cash)

        self.current_round = 0
        self.snapshot = self.coordinator.snapshot(self.current_round)
        self.snapshots: List[PriceSnapshot] = [self.snapshot]
        self.reports: List[RoundReport] = []
        self.net_worth_history: List[Dict[str, float]] = [self._mark_all()[0]]

        self.logger.info(f"Session ready: {len(self.coordinator)} instruments, "
                         f"{len(self.ledgers)} holders, seed={self.config.seed}")

    def _build_engines(self) -> List[PriceEngine]:
        count = self.config.active_instruments
        if count > len(self.catalog):
            self.logger.warning(f"Requested {count} instruments but catalog has {len(self.catalog)}")
            count = len(self.catalog)

        streams = np.random.SeedSequence(self.config.seed).spawn(count + 1)
        selector = np.random.default_rng(streams[0])
        picks = selector.choice(len(self.catalog), size=count, replace=False)

        return [
            PriceEngine(self.catalog[int(index)], rng=np.random.default_rng(stream),
                        price_range=self.config.price_range)
            for index, stream in zip(picks, streams[1:])
        ]

    def _mark_all(self) -> Tuple[Dict[str, float], Dict[str, float]]:
        net_worth, changes = {}, {}
        for holder_id, ledger in self.ledgers.items():
            changes[holder_id] = ledger.mark(self.snapshot)
            net_worth[holder_id] = ledger.previous_net_worth
        return net_worth, changes

    @property
    def ledgers(self) -> Dict[str, PositionLedger]:
        return self.trade_engine.ledgers

    @property
    def instruments(self) -> List[str]:
        return self.coordinator.names

    @property
    def is_finished(self) -> bool:
        return self.current_round >= self.config.total_rounds

    def play_round(self, requests: Iterable[TradeRequest] = ()) -> RoundReport:
        """Fill requests at current prices, advance the market, revalue holders"""
        round_number = self.current_round + 1
        results = [self.trade_engine.submit(request, round_number) for request in requests]

        self.snapshot = self.coordinator.advance_round(round_number)
        self.snapshots.append(self.snapshot)
        self.current_round = round_number

        net_worth, changes = self._mark_all()
        self.net_worth_history.append(net_worth)

        report = RoundReport(
            round_number=round_number,
            snapshot=self.snapshot,
            trade_results=results,
            net_worth=net_worth,
            net_worth_change=changes,
        )
        self.reports.append(report)
        self.logger.debug(f"Round {round_number} settled: {len(results)} requests, "
                          f"{len(report.rejected)} rejected")
        return report

    def run(self, rounds: Optional[int] = None,
            strategy: Optional[Strategy] = None) -> List[RoundReport]:
        """Play up to ``rounds`` rounds, never past the configured total"""
        remaining = max(self.config.total_rounds - self.current_round, 0)
        rounds = remaining if rounds is None else min(rounds, remaining)
        reports = []
        for _ in range(rounds):
            requests = list(strategy(self)) if strategy is not None else []
            reports.append(self.play_round(requests))
        self.logger.info(f"Session finished after round {self.current_round}")
        return reports

    def standings(self) -> List[Tuple[str, float]]:
        return self.trade_engine.standings(self.snapshot)

    def winner(self) -> Tuple[str, float]:
        return self.standings()[0]

    def price_history_frame(self) -> pd.DataFrame:
        """Prices per round, one column per instrument; round 0 is the opening"""
        index = pd.Index([s.round_number for s in self.snapshots], name='round')
        return pd.DataFrame([s.as_dict() for s in self.snapshots], index=index,
                            columns=self.instruments)

    def net_worth_frame(self) -> pd.DataFrame:
        """Net worth per round, one column per holder"""
        index = pd.Index(range(len(self.net_worth_history)), name='round')
        return pd.DataFrame(self.net_worth_history, index=index, columns=list(self.ledgers))

    def __str__(self) -> str:
        return (f"MarketSession(Round: {self.current_round}/{self.config.total_rounds}, "
                f"Instruments: {len(self.coordinator)}, Holders: {len(self.ledgers)})")

    def __repr__(self) -> str:
        return self.__str__()
