"""Product API routes."""

from fastapi import APIRouter, Depends, HTTPException

from store import ContentRepository, Product
from store.workflows import new_id
from web.deps import get_repository
from web.models import ProductCreate

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("")
async def list_products(repo: ContentRepository = Depends(get_repository)):
    return [p.to_local() for p in repo.list_products()]


@router.post("", status_code=201)
async def create_product(body: ProductCreate, repo: ContentRepository = Depends(get_repository)):
    product = Product(id=new_id("prod"), **body.model_dump())
    repo.add_product(product)
    return product.to_local()


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    body: ProductCreate,
    repo: ContentRepository = Depends(get_repository),
):
    if not any(p.id == product_id for p in repo.list_products()):
        raise HTTPException(status_code=404, detail="Product not found")
    product = Product(id=product_id, **body.model_dump())
    repo.update_product(product)
    return product.to_local()


@router.delete("/{product_id}")
async def delete_product(product_id: str, repo: ContentRepository = Depends(get_repository)):
    repo.delete_product(product_id)
    return {"ok": True}
