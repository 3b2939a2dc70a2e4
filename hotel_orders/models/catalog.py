"""Hotel and menu shapes owned by the catalog collaborators."""

from decimal import Decimal
from uuid import uuid4

from pydantic import BaseModel, Field


def _new_id() -> str:
    return uuid4().hex


class Media(BaseModel):
    """Uploaded image reference."""

    link: str
    public_id: str


class MenuItem(BaseModel):
    """A priceable dish on a menu."""

    id: str = Field(default_factory=_new_id)
    name: str
    description: str | None = None
    price: Decimal = Field(ge=0)
    is_available: bool = True
    media: list[Media] = Field(default_factory=list)


class MenuCategory(BaseModel):
    """Group of menu items."""

    id: str = Field(default_factory=_new_id)
    name: str
    items: list[MenuItem] = Field(default_factory=list)


class Menu(BaseModel):
    """A hotel menu; at most one is active per hotel."""

    id: str = Field(default_factory=_new_id)
    hotel_id: str
    name: str
    description: str | None = None
    is_active: bool = False
    categories: list[MenuCategory] = Field(default_factory=list)

    def find_item(self, item_id: str) -> MenuItem | None:
        """Scan the categories for an item by id."""
        for category in self.categories:
            for item in category.items:
                if item.id == item_id:
                    return item
        return None


class Hotel(BaseModel):
    """The parts of a hotel the order service needs."""

    id: str = Field(default_factory=_new_id)
    name: str
    owner_id: str
