"""
Basic demonstration of the wave simulator.
"""

import logging
import sys

from wave_simulator.config.simulation_config import SimulationConfig
from wave_simulator.core.models import TradeRequest
from wave_simulator.simulation.session import MarketSession


def create_demo_session(seed: int = 42, total_rounds: int = 5) -> MarketSession:
    """Factory function to create a demo session"""
    config = SimulationConfig(seed=seed, total_rounds=total_rounds)
    return MarketSession(config)


def print_market(session: MarketSession):
    snapshot = session.snapshot
    for engine in session.coordinator:
        print(f"  {engine.name:<22} ${snapshot[engine.name]:>9,.2f} "
              f"{snapshot.change_percent(engine.name):+7.2f}%  vol {engine.volatility:.0%}")


def print_holder(session: MarketSession, holder_id: str):
    ledger = session.ledgers[holder_id]
    print(f"  {holder_id}: cash ${ledger.cash:,.2f}, net worth ${ledger.net_worth(session.snapshot):,.2f}")
    for instrument, row in ledger.positions_summary(session.snapshot).items():
        print(f"    {instrument:<20} {row['quantity']:>6g} {row['direction']:<5} "
              f"avg ${row['avg_cost']:,.2f} -> ${row['current_price']:,.2f} "
              f"P&L ${row['unrealized_pnl']:+,.2f} ({row['pnl_percent']:+.1f}%)")


def demo_trading_rounds():
    """Two holders: one buys and holds, one shorts and covers"""
    print("=== Trading Rounds Demo ===")

    session = create_demo_session()
    first, second = session.instruments[:2]
    print("\nOpening market:")
    print_market(session)

    plan = {
        1: [TradeRequest("Player 1", first, 100), TradeRequest("Player 2", second, -80)],
        2: [TradeRequest("Player 2", second, 120)],
        3: [TradeRequest("Player 1", first, -150)],
        4: [TradeRequest("Player 1", second, 1_000_000)],
    }

    for round_number in range(1, session.config.total_rounds + 1):
        report = session.play_round(plan.get(round_number, []))
        print(f"\n--- Round {report.round_number} ---")
        for result in report.trade_results:
            status = "filled" if result.success else "rejected"
            print(f"  {result.request.holder_id} {status}: {result.message}")
        print_market(session)
        for holder_id in session.ledgers:
            print_holder(session, holder_id)

    winner, net_worth = session.winner()
    print(f"\nWinner: {winner} with ${net_worth:,.2f}")
    return session


def demo_price_preview():
    """Forward preview of one instrument without disturbing the market"""
    print("\n=== Price Preview Demo ===")

    session = create_demo_session(seed=7)
    engine = session.coordinator.engines[0]
    print(f"{engine}")
    for step, (price, change) in enumerate(engine.preview(10), start=1):
        print(f"  {step:>2}: ${price:,.2f} ({change:+.2%})")
    return engine


def demo_history_frames():
    """Price and net worth history as pandas frames"""
    print("\n=== History Frames Demo ===")

    session = create_demo_session(seed=3, total_rounds=10)
    session.run()
    print(session.price_history_frame().round(2).to_string())
    print(session.net_worth_frame().round(2).to_string())
    return session


def main():
    """Run all demos"""
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    print("Wave Simulator Demo")
    print("=" * 50)

    results = {
        'trading_session': demo_trading_rounds(),
        'preview_engine': demo_price_preview(),
        'history_session': demo_history_frames(),
    }

    print("\n" + "=" * 50)
    print("All demos completed")
    return results


if __name__ == "__main__":
    if len(sys.argv) > 1:
        demo_name = sys.argv[1].lower()

        if demo_name == 'rounds':
            demo_trading_rounds()
        elif demo_name == 'preview':
            demo_price_preview()
        elif demo_name == 'history':
            demo_history_frames()
        else:
            print(f"Unknown demo: {demo_name}")
            print("Available demos: rounds, preview, history")
    else:
        main()
