"""Tests for domain entities."""
import pytest
from pydantic import ValidationError

from sweetshop.domain.entities import LineItem, Product, RegistrationData, User
from sweetshop.domain.value_objects import ProductCategory, UserRole


class TestProduct:
    def test_accepts_camel_case_payload(self):
        product = Product.model_validate(
            {
                "id": "p1",
                "name": "Trufas de cacao",
                "price": 2500,
                "stock": 12,
                "category": "trufas",
                "isFeatured": True,
                "reviewCount": 7,
            }
        )

        assert product.is_featured is True
        assert product.review_count == 7
        assert product.category == ProductCategory.TRUFAS

    def test_negative_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="p1", name="x", price=10, stock=-1)

    def test_snapshot_is_immutable(self, make_product):
        product = make_product()

        with pytest.raises(ValidationError):
            product.stock = 99


class TestLineItem:
    def test_line_total(self, make_product):
        item = LineItem(product=make_product(price=1250, stock=10), quantity=4)

        assert item.line_total == 5000
        assert item.product_id == "p1"

    def test_quantity_cannot_exceed_stock(self, make_product):
        with pytest.raises(ValidationError):
            LineItem(product=make_product(stock=2), quantity=3)

    def test_quantity_must_be_positive(self, make_product):
        with pytest.raises(ValidationError):
            LineItem(product=make_product(), quantity=0)

    def test_to_dict_uses_api_field_names(self, make_product):
        data = LineItem(product=make_product(), quantity=1).to_dict()

        assert data["quantity"] == 1
        assert data["product"]["isActive"] is True
        assert "is_active" not in data["product"]


class TestUser:
    def test_aliases_and_helpers(self, user):
        assert user.first_name == "Ana"
        assert user.full_name == "Ana García"
        assert user.is_admin is False
        assert user.to_dict()["emailVerified"] is True

    def test_admin_role(self, user_payload):
        assert User.model_validate({**user_payload, "role": "admin"}).is_admin
        assert UserRole.ADMIN == "admin"

    def test_merged_accepts_both_key_styles(self, user):
        merged = user.merged({"lastName": "Pérez", "profile_image": "https://cdn/ana.png"})

        assert merged.last_name == "Pérez"
        assert merged.profile_image == "https://cdn/ana.png"
        assert merged.email == user.email
        assert user.last_name == "García"


class TestRegistrationData:
    def _data(self, **overrides):
        values = {
            "firstName": "Ana",
            "lastName": "García",
            "email": " ANA@example.com ",
            "password": "secret1",
            "confirmPassword": "secret1",
        }
        values.update(overrides)
        return values

    def test_email_is_normalized(self):
        data = RegistrationData.model_validate(self._data())

        assert data.email == "ana@example.com"

    def test_passwords_must_match(self):
        with pytest.raises(ValidationError, match="Passwords do not match"):
            RegistrationData.model_validate(self._data(confirmPassword="other1"))

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError):
            RegistrationData.model_validate(self._data(password="abc", confirmPassword="abc"))

    def test_email_requires_at_sign(self):
        with pytest.raises(ValidationError):
            RegistrationData.model_validate(self._data(email="ana.example.com"))

    def test_to_dict_omits_empty_phone(self):
        payload = RegistrationData.model_validate(self._data()).to_dict()

        assert payload["firstName"] == "Ana"
        assert payload["confirmPassword"] == "secret1"
        assert "phone" not in payload
