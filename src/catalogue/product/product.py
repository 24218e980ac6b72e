"""Product aggregate root: one purchasable item in the catalogue."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalogue.shared.money import parse_price
from shared.exceptions import InvalidInput
from shared.utils.db import Base, utcnow

MAX_NAME_LENGTH = 255
MAX_CODE_LENGTH = 50
MAX_IMAGE_LENGTH = 500

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


def _clean_optional(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


class Product(Base):
    """A catalogue entry identified by its unique, human-facing code.

    Prices are stored as two-place decimals and must be positive. The image is
    an opaque reference (a URL or a path); nothing here inspects it.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    code: Mapped[str] = mapped_column(String(MAX_CODE_LENGTH), unique=True, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image: Mapped[str | None] = mapped_column(String(MAX_IMAGE_LENGTH), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Product {self.code}>"

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------
    @staticmethod
    def _validate_name(name, errors):
        name = (name or "").strip()
        if not name:
            errors["name"] = ["Name is required"]
        elif len(name) > MAX_NAME_LENGTH:
            errors["name"] = [f"Name must be at most {MAX_NAME_LENGTH} characters"]
        return name

    @staticmethod
    def _validate_code(code, errors):
        code = (code or "").strip()
        if not code:
            errors["code"] = ["Code is required"]
        elif len(code) > MAX_CODE_LENGTH:
            errors["code"] = [f"Code must be at most {MAX_CODE_LENGTH} characters"]
        return code

    @staticmethod
    def _validate_price(price, errors):
        price, price_errors = parse_price(price)
        if price_errors:
            errors["price"] = price_errors
        return price

    @staticmethod
    def _validate_image(image, errors):
        image = _clean_optional(image)
        if image and len(image) > MAX_IMAGE_LENGTH:
            errors["image"] = [f"Image reference must be at most {MAX_IMAGE_LENGTH} characters"]
        return image

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, name, code, price, description=None, image=None):
        errors = {}
        name = cls._validate_name(name, errors)
        code = cls._validate_code(code, errors)
        price = cls._validate_price(price, errors)
        image = cls._validate_image(image, errors)
        if errors:
            raise InvalidInput(errors)

        return cls(
            name=name,
            code=code,
            price=price,
            description=_clean_optional(description),
            image=image,
        )

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def update_details(self, name=_UNSET, code=_UNSET, price=_UNSET, description=_UNSET, image=_UNSET):
        """Apply a partial update; omitted fields keep their current value.

        All provided fields are validated before any of them is applied.
        """
        errors = {}
        changes = {}
        if name is not _UNSET:
            changes["name"] = self._validate_name(name, errors)
        if code is not _UNSET:
            changes["code"] = self._validate_code(code, errors)
        if price is not _UNSET:
            changes["price"] = self._validate_price(price, errors)
        if description is not _UNSET:
            changes["description"] = _clean_optional(description)
        if image is not _UNSET:
            changes["image"] = self._validate_image(image, errors)
        if errors:
            raise InvalidInput(errors)

        for field, value in changes.items():
            setattr(self, field, value)
        return changes
