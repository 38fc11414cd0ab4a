# catalog_api/main.py
import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from catalog_api import database
from catalog_api.models import Product, ProductIn

logger = logging.getLogger(__name__)

app = FastAPI(title="catalog-api (in-memory)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # the browser UI runs on its own dev server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products", response_model=List[Product])
async def list_products():
    return database.all_products()


@app.get("/api/products/{product_id}", response_model=Product)
async def get_product(product_id: str):
    p = database.get_product(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p


@app.post("/api/products", status_code=201, response_model=Product)
async def create_product(payload: ProductIn):
    p = database.insert_product(payload)
    logger.info("Created product %s (%s)", p["id"], p["name"])
    return p


@app.put("/api/products/{product_id}", response_model=Product)
async def update_product(product_id: str, payload: ProductIn):
    p = database.replace_product(product_id, payload)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    logger.info("Updated product %s", product_id)
    return p


@app.delete("/api/products/{product_id}")
async def delete_product(product_id: str):
    if not database.remove_product(product_id):
        raise HTTPException(status_code=404, detail="product not found")
    logger.info("Deleted product %s", product_id)
    return {"message": "Product deleted"}


# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/api/reset")
async def reset_all():
    database.clear()
    return {"status": "reset"}


if __name__ == "__main__":
    import uvicorn

    from catalog_api.config import settings

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
