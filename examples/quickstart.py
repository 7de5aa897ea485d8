from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    from lattice_pricing import (
        AmericanTree,
        ArithmeticMean,
        Call,
        EuropeanTree,
        PathDependentTree,
        Put,
        pde_price,
    )

    spot, rate, vol, T = 100.0, 0.05, 0.20, 1.0

    eu = EuropeanTree.from_params(spot, rate, vol, T, 400, Call(100.0))
    print("European call (CRR):", eu.price(), "delta:", eu.delta_zero())

    am = AmericanTree.from_params(spot, rate, vol, T, 8, Put(100.0))
    print("American put (Richardson):", am.price_rr(), "delta:", am.delta_rr())
    print("American put hedge at t=0 (8 steps):", am.delta_zero())

    asian = PathDependentTree.from_params(spot, rate, vol, T, 12, Call(100.0), ArithmeticMean())
    print("Asian call (tree):", asian.price(), "MC:", asian.price_mc())

    print("European call (PDE):", pde_price(Call(100.0), vol, spot=spot, rate=rate, maturity=T))
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
