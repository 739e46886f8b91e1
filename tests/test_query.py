# tests/test_query.py
from catalog.models import Product
from catalog.query import ProductQuery, run_query


def _product(i, name, price, category="Office", description="", stock=1):
    return Product(id=str(i), name=name, description=description or name,
                   price=price, category=category, stock=stock)


PENS = [
    _product(1, "Red Pen", 1.5, stock=10),
    _product(2, "Blue Pen", 2.5, stock=0),
]


def test_search_and_min_price():
    page = run_query(PENS, ProductQuery.from_params({"q": "pen", "minPrice": "2"}))
    assert page.total == 1
    assert [p.name for p in page.products] == ["Blue Pen"]


def test_search_matches_description_case_insensitively():
    items = [_product(1, "Mug", 5, description="Large CERAMIC mug"), _product(2, "Cup", 4)]
    page = run_query(items, ProductQuery(q="ceramic"))
    assert [p.name for p in page.products] == ["Mug"]


def test_category_is_exact_and_case_insensitive():
    items = [_product(1, "a", 1, "Office"), _product(2, "b", 1, "office supplies"), _product(3, "c", 1, "OFFICE")]
    page = run_query(items, ProductQuery.from_params({"category": "office"}))
    assert [p.id for p in page.products] == ["1", "3"]


def test_price_bounds_are_inclusive():
    items = [_product(i, f"p{i}", float(i)) for i in range(1, 6)]
    page = run_query(items, ProductQuery.from_params({"minPrice": "2", "maxPrice": "4"}))
    assert [p.price for p in page.products] == [2.0, 3.0, 4.0]


def test_unparsable_price_is_ignored():
    page = run_query(PENS, ProductQuery.from_params({"minPrice": "cheap", "maxPrice": ""}))
    assert page.total == 2


def test_pagination_slice_and_total():
    items = [_product(i, f"p{i}", 1) for i in range(7)]
    page = run_query(items, ProductQuery.from_params({"page": "2", "limit": "3"}))
    assert page.total == 7
    assert page.page == 2
    assert page.limit == 3
    assert page.products == items[3:6]


def test_out_of_range_page_is_empty():
    items = [_product(i, f"p{i}", 1) for i in range(7)]
    page = run_query(items, ProductQuery(page=5, limit=3))
    assert page.products == []
    assert page.total == 7


def test_pagination_applies_after_filters():
    items = [_product(i, f"p{i}", float(i)) for i in range(1, 21)]
    page = run_query(items, ProductQuery.from_params({"minPrice": "11", "limit": "5", "page": "2"}))
    assert page.total == 10
    assert [p.price for p in page.products] == [16.0, 17.0, 18.0, 19.0, 20.0]


def test_page_and_limit_defaults():
    query = ProductQuery.from_params({"page": "abc", "limit": "0"})
    assert (query.page, query.limit) == (1, 10)
    assert ProductQuery.from_params({"page": "2.7"}).page == 2
    assert ProductQuery.from_params({}) == ProductQuery()


def test_max_price_alone():
    page = run_query(PENS, ProductQuery.from_params({"maxPrice": "2"}))
    assert [p.name for p in page.products] == ["Red Pen"]


def test_min_price_alone():
    page = run_query(PENS, ProductQuery.from_params({"minPrice": "1.5"}))
    assert [p.name for p in page.products] == ["Red Pen", "Blue Pen"]
    page = run_query(PENS, ProductQuery.from_params({"minPrice": "2.6"}))
    assert page.total == 0


def test_empty_search_returns_everything():
    page = run_query(PENS, ProductQuery.from_params({"q": ""}))
    assert page.total == 2
    assert page.products == PENS
