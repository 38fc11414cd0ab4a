#!/usr/bin/env python
from catalog_sdk.client import ProductClient
from catalog_sdk.models import Draft, validate_draft


def main():
    c = ProductClient(base_url="http://127.0.0.1:5000")

    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting catalog...")
    c.reset()

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    pen = c.create_product(validate_draft(Draft("Pen", "1.50", "Blue pen", "General")))
    laptop = c.create_product(validate_draft(Draft("Laptop", "999.99", "14 inch", "Electronics")))
    print(pen)
    print(laptop)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Update product
    # -----------------------------
    print("\nDiscounting the laptop...")
    print(c.update_product(laptop.id, validate_draft(Draft("Laptop", "899.00", "14 inch", "Electronics"))))

    # -----------------------------
    # Delete product
    # -----------------------------
    print("\nDeleting the pen...")
    print(c.delete_product(pen.id))
    print(c.list_products())


if __name__ == "__main__":
    main()
