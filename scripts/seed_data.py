"""Seed a demo hotel with an active menu."""

import asyncio
from decimal import Decimal

from hotel_orders.models.catalog import Hotel, Media, Menu, MenuCategory, MenuItem
from hotel_orders.state import HotelRepository, MenuRepository, StateManager

DEMO_HOTEL_ID = "demo-hotel"
DEMO_OWNER_ID = "demo-owner"


def build_demo_menu() -> Menu:
    """The menu served by the demo hotel."""
    return Menu(
        id="demo-menu",
        hotel_id=DEMO_HOTEL_ID,
        name="All Day Dining",
        is_active=True,
        categories=[
            MenuCategory(
                id="mains",
                name="Mains",
                items=[
                    MenuItem(
                        id="butter-chicken",
                        name="Butter Chicken",
                        description="Tandoori chicken in a tomato and butter gravy",
                        price=Decimal("12.50"),
                        media=[
                            Media(
                                link="https://cdn.example.com/menu/butter-chicken.jpg",
                                public_id="menu/butter-chicken",
                            )
                        ],
                    ),
                    MenuItem(
                        id="paneer-tikka",
                        name="Paneer Tikka",
                        description="Grilled cottage cheese with peppers",
                        price=Decimal("10.00"),
                    ),
                    MenuItem(
                        id="lamb-biryani",
                        name="Lamb Biryani",
                        price=Decimal("14.75"),
                        is_available=False,
                    ),
                ],
            ),
            MenuCategory(
                id="drinks",
                name="Drinks",
                items=[
                    MenuItem(id="mango-lassi", name="Mango Lassi", price=Decimal("4.25")),
                    MenuItem(id="masala-chai", name="Masala Chai", price=Decimal("2.50")),
                ],
            ),
        ],
    )


async def seed_hotel_and_menu() -> None:
    """Seed the demo hotel and its active menu."""
    print("Seeding hotel and menu...")

    state_manager = StateManager()
    await state_manager.connect()

    hotel = Hotel(id=DEMO_HOTEL_ID, name="Demo Grand Hotel", owner_id=DEMO_OWNER_ID)
    await HotelRepository(state_manager).save_hotel(hotel)
    print(f"  ✓ Added {hotel.name} (owner: {hotel.owner_id})")

    menu = build_demo_menu()
    await MenuRepository(state_manager).save_active_menu(menu)
    for category in menu.categories:
        for item in category.items:
            availability = "available" if item.is_available else "unavailable"
            print(f"  ✓ Added {item.name} ({item.price}, {availability})")

    await state_manager.disconnect()
    print("✓ Hotel and menu seeded successfully\n")


async def main() -> None:
    """Run all seed functions."""
    print("\n" + "=" * 50)
    print("  Seeding Hotel Order Service Data")
    print("=" * 50 + "\n")

    await seed_hotel_and_menu()

    print("=" * 50)
    print("  ✓ All data seeded successfully!")
    print(f"  Owner headers:    X-Actor-Id: {DEMO_OWNER_ID}, X-Actor-Role: hotel_owner")
    print("  Customer headers: X-Actor-Id: <any>, X-Actor-Role: customer")
    print("=" * 50 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
