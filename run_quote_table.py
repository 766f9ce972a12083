"""
run_quote_table.py

Print how the reservation price and quotes move with inventory for a
given gamma / sigma.
"""

import argparse

from mmsim.avellaneda import InventorySkewQuoter
from mmsim.config import SimulationConfig


def main(argv=None):
    p = argparse.ArgumentParser(description="Inventory -> reservation price -> bid/ask")
    p.add_argument("--gamma", type=float, default=0.1)
    p.add_argument("--sigma", type=float, default=0.5)
    p.add_argument("--mid", type=float, default=1000.0)
    args = p.parse_args(argv)

    cfg = SimulationConfig(risk_aversion=args.gamma, volatility=args.sigma)
    quoter = InventorySkewQuoter.from_config(cfg)

    print("Inventory → Reservation price → Bid/Ask")
    for q in [-10, -5, -2, 0, 2, 5, 10]:
        quotes = quoter.compute_quotes(S=args.mid, q=q, gamma=cfg.risk_aversion, sigma=cfg.volatility)
        print(
            f"{q:3} → r={quotes.reservation_price:.3f}, "
            f"bid={quotes.bid:.3f}, ask={quotes.ask:.3f}"
        )


if __name__ == "__main__":
    main()
