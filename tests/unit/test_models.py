"""
Unit tests for Pydantic models.

This module tests request validation boundaries and the stored and public
shapes of the domain models.
"""

import pytest
from pydantic import ValidationError

from marketplace.models.account import Account, AccountRole
from marketplace.models.catalog_item import DEFAULT_ITEM_IMAGE, CatalogItem
from marketplace.models.input import (
    AddItemRequest,
    CreateOrderRequest,
    CreateReviewRequest,
    CreateStorefrontRequest,
    LoginRequest,
    RegisterRequest,
)
from marketplace.models.order import EnrichedOrder, Order, OrderLine, OrderStatus
from marketplace.models.review import Review
from marketplace.models.storefront import DEFAULT_STOREFRONT_IMAGE, Storefront


def _item_body(**overrides):
    body = {
        "storeId": "store-1",
        "name": "Mug",
        "description": "Stoneware mug",
        "price": 19.99,
        "category": "kitchen",
    }
    body.update(overrides)
    return body


class TestRegisterRequest:
    """Test cases for RegisterRequest model."""

    def test_email_is_lowercased(self):
        request = RegisterRequest.model_validate({
            "name": "Jane Smith",
            "email": "Jane.Smith@Example.COM",
            "password": "secret1",
            "role": "seller",
        })

        assert request.email == "jane.smith@example.com"
        assert request.role == AccountRole.SELLER

    @pytest.mark.parametrize("password", ["", "12345"])
    def test_short_password_rejected(self, password):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate({"name": "Jane", "email": "jane@example.com", "password": password, "role": "buyer"})

    def test_six_character_password_accepted(self):
        request = RegisterRequest.model_validate({"name": "Jane", "email": "jane@example.com", "password": "123456", "role": "buyer"})
        assert request.password == "123456"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate({"name": "Jane", "email": "jane@example.com", "password": "secret1", "role": "admin"})

    @pytest.mark.parametrize("email", ["not-an-email", "jane@", "@example.com", "jane@example"])
    def test_malformed_email_rejected(self, email):
        with pytest.raises(ValidationError):
            RegisterRequest.model_validate({"name": "Jane", "email": email, "password": "secret1", "role": "buyer"})

    def test_missing_fields_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest.model_validate({})

        missing = {error["loc"][0] for error in exc_info.value.errors()}
        assert missing == {"name", "email", "password", "role"}


class TestLoginRequest:
    """Test cases for LoginRequest model."""

    def test_email_normalized(self):
        request = LoginRequest.model_validate({"email": " USER@Example.com ", "password": "pw"})
        assert request.email == "user@example.com"

    def test_empty_password_rejected(self):
        with pytest.raises(ValidationError):
            LoginRequest.model_validate({"email": "user@example.com", "password": ""})


class TestAddItemRequest:
    """Test cases for AddItemRequest model."""

    def test_zero_price_accepted(self):
        assert AddItemRequest.model_validate(_item_body(price=0)).price == 0

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            AddItemRequest.model_validate(_item_body(price=-0.01))
        assert "Price must be a valid positive number" in str(exc_info.value)

    def test_numeric_string_price_accepted(self):
        assert AddItemRequest.model_validate(_item_body(price="12.50")).price == 12.5

    @pytest.mark.parametrize("price", ["abc", "inf", "nan"])
    def test_non_finite_price_rejected(self, price):
        with pytest.raises(ValidationError):
            AddItemRequest.model_validate(_item_body(price=price))

    def test_store_id_required(self):
        body = _item_body()
        del body["storeId"]
        with pytest.raises(ValidationError):
            AddItemRequest.model_validate(body)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            AddItemRequest.model_validate(_item_body(name="   "))


class TestCreateStorefrontRequest:
    """Test cases for CreateStorefrontRequest model."""

    def test_image_optional(self):
        request = CreateStorefrontRequest.model_validate({"name": "Shop", "description": "Things", "category": "misc"})
        assert request.image is None

    def test_category_required(self):
        with pytest.raises(ValidationError):
            CreateStorefrontRequest.model_validate({"name": "Shop", "description": "Things"})


class TestCreateReviewRequest:
    """Test cases for CreateReviewRequest model."""

    @pytest.mark.parametrize("rating", [1, 5])
    def test_rating_bounds_accepted(self, rating):
        request = CreateReviewRequest.model_validate({"itemId": "item-1", "rating": rating, "comment": "ok"})
        assert request.rating == rating

    @pytest.mark.parametrize("rating", [0, 6, 4.5])
    def test_rating_out_of_range_rejected(self, rating):
        with pytest.raises(ValidationError):
            CreateReviewRequest.model_validate({"itemId": "item-1", "rating": rating, "comment": "ok"})

    def test_whitespace_comment_rejected(self):
        with pytest.raises(ValidationError):
            CreateReviewRequest.model_validate({"itemId": "item-1", "rating": 3, "comment": "   "})

    def test_comment_trimmed(self):
        request = CreateReviewRequest.model_validate({"itemId": "item-1", "rating": 3, "comment": "  nice  "})
        assert request.comment == "nice"


class TestCreateOrderRequest:
    """Test cases for CreateOrderRequest model."""

    def _body(self, **overrides):
        body = {
            "items": [{"itemId": "item-1", "quantity": 2, "price": 19.99}],
            "shippingAddress": "1 Main St",
            "total": 39.98,
        }
        body.update(overrides)
        return body

    def test_valid_order(self):
        request = CreateOrderRequest.model_validate(self._body())
        assert request.items[0].item_id == "item-1"
        assert request.total == 39.98

    def test_address_object_accepted(self):
        request = CreateOrderRequest.model_validate(self._body(shippingAddress={"street": "1 Main St", "city": "Springfield"}))
        assert request.shipping_address["city"] == "Springfield"

    @pytest.mark.parametrize("overrides", [
        {"items": []},
        {"shippingAddress": ""},
        {"shippingAddress": {}},
        {"total": 0},
        {"total": -5},
        {"items": [{"itemId": "item-1", "quantity": 0, "price": 1}]},
    ])
    def test_invalid_orders_rejected(self, overrides):
        with pytest.raises(ValidationError):
            CreateOrderRequest.model_validate(self._body(**overrides))


class TestDomainModels:
    """Test cases for stored and public record shapes."""

    def test_account_record_and_profile(self):
        account = Account.create(email="Seller@Example.com", name="Sam", password_hash="$2b$hash", role=AccountRole.SELLER)

        record = account.to_record()
        assert record["email"] == "seller@example.com"
        assert record["password"] == "$2b$hash"
        assert record["hasStorefront"] is False
        assert record["role"] == "seller"
        assert "userId" in record and "createdAt" in record

        profile = account.to_profile().to_record()
        assert "password" not in profile
        assert profile["userId"] == account.user_id

    def test_account_round_trips_from_record(self):
        account = Account.create(email="a@example.com", name="A", password_hash="hash", role=AccountRole.BUYER)
        assert Account.model_validate(account.to_record()) == account

    def test_storefront_defaults(self):
        storefront = Storefront.create(name="Shop", description="d", category="c", owner="user-1", owner_name="Sam")

        record = storefront.to_record()
        assert record["image"] == DEFAULT_STOREFRONT_IMAGE
        assert record["items"] == []
        assert record["ownerName"] == "Sam"
        assert record["createdAt"] == record["updatedAt"]

    def test_catalog_item_defaults(self):
        item = CatalogItem.create(store_id="store-1", name="Mug", description="d", price=0, category="kitchen")

        assert item.image == DEFAULT_ITEM_IMAGE
        assert item.average_rating == 0
        assert item.reviews == []
        assert item.to_record()["storeId"] == "store-1"

    def test_review_comment_stripped(self):
        review = Review.create(item_id="item-1", user_id="user-1", rating=4, comment="  good  ")
        assert review.comment == "good"

    def test_order_created_pending(self):
        order = Order.create(
            user_id="user-1",
            items=[OrderLine(item_id="item-1", quantity=1, price=5)],
            shipping_address="1 Main St",
            total=5,
        )

        assert order.status == OrderStatus.PENDING
        assert order.to_record()["status"] == "pending"

    def test_enriched_order_accepts_missing_details(self):
        order = EnrichedOrder.model_validate({
            "orderId": "order-1",
            "userId": "user-1",
            "items": [{"itemId": "gone", "quantity": 1, "price": 2.5, "itemDetails": None}],
            "shippingAddress": "1 Main St",
            "total": 2.5,
            "status": "pending",
            "createdAt": "2024-01-01T00:00:00+00:00",
            "updatedAt": "2024-01-01T00:00:00+00:00",
        })

        assert order.items[0].item_details is None
        assert order.to_record()["items"][0]["itemDetails"] is None
