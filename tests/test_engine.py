import io
import logging

import pytest

from storefront.core.context import ValidationContext
from storefront.core.errors import InternalConsistencyError
from storefront.core.events import Command
from storefront.core.types import CommandKind, Coin, SportsCard, TransactionKind
from storefront.exec.engine import CommandEngine
from storefront.io.loaders import load_commands, load_customers, load_inventory, numbered
from storefront.state.store import Store

CTX = ValidationContext(current_year=2020)

CUSTOMERS = ["001, Amy", "002, Bob"]
INVENTORY = [
    "M, 2, 2001, 65, Lincoln",
    "C, 1, 1938, Mint, Superman, DC",
]


def _engine():
    store = Store()
    load_customers(store.ledger, numbered(CUSTOMERS))
    load_inventory(store.catalog, numbered(INVENTORY), CTX)
    out = io.StringIO()
    return store, CommandEngine(store, CTX, out=out), out


def _cmd(line):
    return load_commands(numbered([line]))[0]


def test_sell_records_transaction_and_decrements():
    store, engine, _ = _engine()
    lincoln = Coin("Lincoln", 2001, 65)
    assert engine.execute(_cmd("S, 001, M, 2001, 65, Lincoln"))
    assert store.catalog.count("M", lincoln) == 1
    amy = store.ledger.find("001")
    assert [(t.kind, t.item) for t in amy.transactions] == [(TransactionKind.SELL, lincoln)]
    assert engine.execute(_cmd("S, 002, M, 2001, 65, Lincoln"))
    assert not store.catalog.contains("M", lincoln)
    assert not engine.execute(_cmd("S, 002, M, 2001, 65, Lincoln"))
    assert len(store.ledger.find("002").transactions) == 1


def test_buy_new_and_existing():
    store, engine, _ = _engine()
    card = SportsCard("Ken Griffey Jr", 1989, "Upper Deck", "Near Mint")
    line = "B, 002, S, 1989, Near Mint, Ken Griffey Jr, Upper Deck"
    assert engine.execute(_cmd(line))
    assert store.catalog.count("S", card) == 1
    assert engine.execute(_cmd(line))
    assert store.catalog.count("S", card) == 2
    bob = store.ledger.find("002")
    assert [t.kind for t in bob.transactions] == [TransactionKind.BUY] * 2
    # the receipt outlives the catalog record
    store.catalog.sell_one("S", card)
    store.catalog.sell_one("S", card)
    assert bob.transactions[0].item == card


def test_unknown_customer_is_a_no_op(caplog):
    store, engine, out = _engine()
    coins = store.catalog.tree("M").copy()
    comics = store.catalog.tree("C").copy()
    with caplog.at_level(logging.WARNING):
        for line in (
            "S, 999, M, 2001, 65, Lincoln",
            "B, 999, M, 1990, 10, Washington",
            "C, 999",
        ):
            assert engine.execute(_cmd(line)) is False
    assert "999 not found" in caplog.text
    assert store.catalog.tree("M") == coins
    assert store.catalog.tree("C") == comics
    assert all(not c.transactions for c in store.ledger.customers())
    assert out.getvalue() == (
        "Sell Item Error: Customer ID 999 not found.\n\n"
        "Buy Item Error: Customer ID 999 not found.\n\n"
        "Customer ID 999 not found.\n\n"
    )


def test_invalid_item_is_rejected_before_mutation(caplog):
    store, engine, _ = _engine()
    with caplog.at_level(logging.WARNING):
        assert not engine.execute(_cmd("B, 001, M, 2030, 65, Lincoln"))
        assert not engine.execute(_cmd("S, 001, Q, 2001, 65, Lincoln"))
        assert not engine.execute(_cmd("S, abc, M, 2001, 65, Lincoln"))
    assert "invalid" in caplog.text
    assert store.ledger.find("001").transactions == []
    assert store.catalog.total_units() == 3


def test_malformed_direct_commands():
    _, engine, _ = _engine()
    assert not engine.execute(Command(CommandKind.SELL, []))
    assert not engine.execute(Command(CommandKind.BUY, ["001"]))


def test_report_commands_write_output():
    store, engine, out = _engine()
    summary = engine.run(
        load_commands(
            numbered(["B, 001, M, 1990, 10, Washington", "C, 001", "C, 002", "H", "D"])
        )
    )
    assert summary.executed == 5 and summary.failed == 0
    text = out.getvalue()
    assert "Customer: 001, Amy\nTransactions:\nB: Washington, 1990, 10\n" in text
    assert "Customer: 002, Bob\nTransactions:\nnone\n" in text
    assert text.index("Transaction History:") < text.index("Inventory:")
    assert "Lincoln, 2001, 65; Count: 2" in text


def test_run_counts_failures():
    _, engine, _ = _engine()
    summary = engine.run(load_commands(numbered(["S, 001, M, 1800, 1, Gone", "D"])))
    assert summary.executed == 2
    assert summary.failed == 1


def test_error_lines_interleave_with_reports():
    _, engine, out = _engine()
    engine.run(
        load_commands(
            numbered(
                [
                    "S, 001, M, 1999, 1, Gone",
                    "S, 001, Q, 2001, 65, Lincoln",
                    "B, 001, M, 2030, 65, Lincoln",
                    "S, abc, M, 2001, 65, Lincoln",
                    "D",
                ]
            )
        )
    )
    assert out.getvalue() == (
        "Sell Item Error. Item not found: Gone, 1999, 1\n\n"
        "Sell Item Error. Invalid item type: Q\n\n"
        "Buy Item Error. Invalid data.\n\n"
        "Sell Item Error: Customer ID abc invalid.\n\n"
        "Inventory: \n"
        "Lincoln, 2001, 65; Count: 2\n"
        "DC, Superman, 1938, Mint; Count: 1\n"
        "\n"
    )


def _broken_remove(key):
    raise InternalConsistencyError("successor missing")


def test_consistency_error_escapes_execute(monkeypatch):
    store, engine, _ = _engine()
    monkeypatch.setattr(store.catalog.tree("M"), "remove", _broken_remove)
    with pytest.raises(InternalConsistencyError):
        engine.execute(_cmd("S, 001, M, 2001, 65, Lincoln"))
    assert store.ledger.find("001").transactions == []


def test_consistency_error_ends_run(monkeypatch):
    store, engine, out = _engine()
    monkeypatch.setattr(store.catalog.tree("M"), "remove", _broken_remove)
    commands = load_commands(numbered(["D", "S, 001, M, 2001, 65, Lincoln", "D"]))
    with pytest.raises(InternalConsistencyError):
        engine.run(commands)
    assert out.getvalue().count("Inventory:") == 1
