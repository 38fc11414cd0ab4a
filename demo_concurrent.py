import asyncio

from catalog_sdk.client import AsyncProductClient
from catalog_sdk.models import Draft
from catalog_sdk.store import CatalogStore


async def main():
    async with AsyncProductClient(base_url="http://127.0.0.1:5000") as client:
        store = CatalogStore(client)
        await store.refresh()
        print(f"\n📦 Starting with {len(store.products)} products")

        # A plain refresh and a create race; the create's own refresh starts last and wins
        print("\n⚡ Refreshing while creating...")
        await asyncio.gather(
            store.refresh(),
            store.create(Draft("Notebook", "3.25", "A5 ruled", "Books")),
        )

        print(f"\n📦 Final snapshot ({store.state.status.value}):")
        for p in store.products:
            print(f"  {p.name:<20} ${p.price:.2f}  {p.category.value}")
        if store.error:
            print(f"❌ {store.error}")


if __name__ == "__main__":
    asyncio.run(main())
