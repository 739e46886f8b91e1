# tests/test_validation.py
import pytest
from pydantic import ValidationError

from catalog.core import Invalid, Valid, authenticate, validate_product
from catalog.models import ProductIn


def test_valid_payload_is_trimmed(payload):
    result = validate_product(payload(name="  Widget  ", category=" Tools"))
    assert isinstance(result, Valid)
    assert result.product.name == "Widget"
    assert result.product.category == "Tools"
    assert result.product.price == 9.99
    assert result.product.stock == 3


@pytest.mark.parametrize("field", ["name", "description", "price", "category", "stock"])
def test_missing_field_is_named(payload, field):
    data = payload()
    del data[field]
    result = validate_product(data)
    assert isinstance(result, Invalid)
    assert result.field == field
    assert field in result.reason


@pytest.mark.parametrize("price", [0, -1, "10", True, None, float("nan")])
def test_bad_price(payload, price):
    result = validate_product(payload(price=price))
    assert result == Invalid("price", result.reason)
    assert "price" in result.reason


@pytest.mark.parametrize("stock", [-1, 1.5, "3", False])
def test_bad_stock(payload, stock):
    result = validate_product(payload(stock=stock))
    assert isinstance(result, Invalid)
    assert result.field == "stock"


def test_zero_stock_and_integral_float_allowed(payload):
    assert validate_product(payload(stock=0)).product.stock == 0
    result = validate_product(payload(stock=5.0))
    assert result.product.stock == 5
    assert isinstance(result.product.stock, int)


def test_blank_text_rejected(payload):
    result = validate_product(payload(description="   "))
    assert result == Invalid("description", "description must be a non-empty string")


def test_only_first_violation_reported(payload):
    result = validate_product(payload(name="", price=-5, stock=-1))
    assert result.field == "name"


def test_non_object_body():
    assert validate_product(None) == Invalid("body", "request body must be a JSON object")
    assert validate_product(["name"]).field == "body"


def test_authenticate():
    assert authenticate("secret", "secret") is True
    assert authenticate("Secret", "secret") is False
    assert authenticate("secret ", "secret") is False
    assert authenticate("", "secret") is False
    assert authenticate(None, "secret") is False
    assert authenticate("secret", "") is False


def test_model_rejects_invalid_fields():
    with pytest.raises(ValidationError):
        ProductIn(name="", description="d", price=1.0, category="c", stock=1)
    with pytest.raises(ValidationError):
        ProductIn(name="n", description="d", price=-1, category="c", stock=1)
    with pytest.raises(ValidationError):
        ProductIn(name="n", description="d", price=1.0, category="c", stock=-5)
    with pytest.raises(ValidationError):
        ProductIn(name="n", description="d", price=1.0, category=" ", stock=1)


def test_huge_integer_price_is_rejected(payload):
    result = validate_product(payload(price=10 ** 400))
    assert result == Invalid("price", "price must be a positive number")


def test_infinite_price_is_rejected(payload):
    assert validate_product(payload(price=float("inf"))).field == "price"
