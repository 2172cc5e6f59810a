import pytest

from storefront.core.errors import InvalidArgument, UnknownCategory
from storefront.core.types import Category, Coin, Comic, SportsCard
from storefront.state.catalog import CatalogIndex, resolve_category


LINCOLN = Coin("Lincoln", 2001, 65)
SUPERMAN = Comic("DC", "Superman", 1938, "Mint")
GRIFFEY = SportsCard("Ken Griffey Jr", 1989, "Upper Deck", "Near Mint")


def test_item_ordering_within_kind():
    assert Coin("Lincoln", 2001, 65) < Coin("Lincoln", 2001, 66)
    assert Coin("Lincoln", 2001, 66) < Coin("Lincoln", 2002, 1)
    assert Coin("Lincoln", 2002, 1) < Coin("Washington", 1900, 1)
    assert Comic("DC", "Batman", 1990, "Fine") < Comic("DC", "Superman", 1938, "Mint")
    assert SportsCard("Babe Ruth", 1933, "Goudey", "Poor") < GRIFFEY
    assert LINCOLN != SUPERMAN
    with pytest.raises(TypeError):
        LINCOLN < SUPERMAN


def test_resolve_category():
    assert resolve_category("M") is Category.COIN
    assert resolve_category(Category.COMIC) is Category.COMIC
    with pytest.raises(UnknownCategory):
        resolve_category("X")


def test_sell_success_until_out_of_stock():
    cat = CatalogIndex()
    cat.add_units("M", LINCOLN, 2)
    assert cat.sell_one("M", LINCOLN) is True
    assert cat.count("M", LINCOLN) == 1
    assert cat.sell_one("M", LINCOLN) is True
    assert not cat.contains("M", LINCOLN)
    assert cat.sell_one("M", LINCOLN) is False


def test_buy_new_vs_existing():
    cat = CatalogIndex()
    first = cat.buy_one(Category.SPORTS_CARD, GRIFFEY)
    assert first.already_present is False
    assert cat.count("S", GRIFFEY) == 1
    second = cat.buy_one(Category.SPORTS_CARD, GRIFFEY)
    assert second.already_present is True
    assert cat.count("S", GRIFFEY) == 2


def test_add_units_preconditions():
    cat = CatalogIndex()
    with pytest.raises(UnknownCategory):
        cat.add_units("Z", LINCOLN, 1)
    with pytest.raises(InvalidArgument):
        cat.add_units("M", LINCOLN, 0)
    with pytest.raises(InvalidArgument):
        cat.add_units("M", None, 1)
    with pytest.raises(InvalidArgument):
        cat.add_units("C", LINCOLN, 1)
    assert cat.total_units() == 0


def test_sections_in_canonical_order():
    cat = CatalogIndex()
    cat.add_units("S", GRIFFEY, 1)
    cat.add_units("C", SUPERMAN, 1)
    cat.add_units("M", LINCOLN, 3)
    assert [c for c, _ in cat.sections()] == [
        Category.COIN,
        Category.COMIC,
        Category.SPORTS_CARD,
    ]
    assert cat.total_units() == 5
    assert list(cat.tree("M").items()) == [(LINCOLN, 3)]
