"""Remove all order service data from Redis (useful for testing)."""

import asyncio

from hotel_orders.state.manager import StateManager

KEY_PATTERNS = ["order:*", "orders:customer:*", "menu:active:*", "hotel:*"]


async def reset_all_state() -> None:
    """Delete every key owned by the order service."""
    print("\n⚠️  WARNING: This will delete ALL orders, menus and hotels from Redis!")
    response = input("Are you sure? (yes/no): ")

    if response.lower() != "yes":
        print("Cancelled.")
        return

    print("\nResetting state...")

    state_manager = StateManager()
    await state_manager.connect()

    deleted = 0
    for pattern in KEY_PATTERNS:
        deleted += await state_manager.delete_matching(pattern)

    await state_manager.disconnect()

    print(f"✓ Removed {deleted} keys from Redis\n")


if __name__ == "__main__":
    asyncio.run(reset_all_state())
