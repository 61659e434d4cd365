"""
Product catalog endpoints.

Paths and parameter names match the storefront and dashboard frontends.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile

from ..config.settings import Settings, get_settings
from ..exceptions import StorageError, StorefrontError, ValidationError
from ..repositories.base import validate_document
from ..schemas.common import PaginationMeta, SuccessResponse
from ..schemas.product import (
    AddSizeVariantRequest,
    CreateProductRequest,
    DeleteSizeVariantRequest,
    EditSizeVariantRequest,
    ImageMutationResponse,
    ProductImageRequest,
    ProductResponse,
    ProductsListResponse,
    ProductsPageResponse,
    ReplaceSizeVariantsRequest,
    UpdateProductRequest,
    ValidOptionsResponse,
)
from ..services.blob_store import BlobStore
from ..services.catalog_query import CatalogQuery, valid_options
from ..services.image_gallery import ImageGallery
from ..services.product_service import ProductService
from ..services.variant_ledger import VariantLedger
from ..utils.dependencies import (
    get_blob_store,
    get_catalog_query,
    get_image_gallery,
    get_product_service,
    get_variant_ledger,
)
from ..utils.uploads import store_uploads

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])


# Catalog reads

@router.get("/GetProducts", response_model=ProductsPageResponse)
async def get_products(
    category: Optional[str] = Query(None, description="Exact category"),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0, description="Lowest variant price"),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0, description="Highest variant price"),
    search: Optional[str] = Query(None, description="Text matched against title, description and category"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: Optional[int] = Query(None, ge=1, le=get_settings().max_page_size, description="Products per page"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Sort field"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc"),
    catalog: CatalogQuery = Depends(get_catalog_query),
):
    """List products with filtering and pagination"""
    try:
        result = await catalog.list_products(
            category=category,
            min_price=min_price,
            max_price=max_price,
            search=search,
            page=page,
            limit=limit,
            sort_field=sort_by,
            sort_dir=sort_order,
        )
        return ProductsPageResponse(
            products=result.items,
            pagination=PaginationMeta(
                page=result.page, limit=result.limit, total=result.total, pages=result.pages
            ),
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products: {str(e)}")
        raise StorageError("Error fetching products", detail=str(e))


@router.get("/GetAllProducts", response_model=ProductsListResponse)
async def get_all_products(
    category: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    search: Optional[str] = Query(None),
    catalog: CatalogQuery = Depends(get_catalog_query),
):
    """Every matching product for the dashboard, without pagination"""
    try:
        products = await catalog.dashboard(category, min_price, max_price, search)
        return ProductsListResponse(products=products, count=len(products))
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch dashboard products: {str(e)}")
        raise StorageError("Error fetching products", detail=str(e))


@router.get("/SingleProduct", response_model=ProductResponse)
@router.get("/Product", response_model=ProductResponse)
async def get_product(
    id: Optional[str] = Query(None, description="Product ID"),
    products: ProductService = Depends(get_product_service),
):
    """Get a specific product by ID"""
    try:
        product = await products.get_product(id)
        return ProductResponse(product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product {id}: {str(e)}")
        raise StorageError("Error fetching product", detail=str(e))


@router.get("/SearchProducts", response_model=ProductsListResponse)
async def search_products(
    query: Optional[str] = Query(None, description="Search text"),
    catalog: CatalogQuery = Depends(get_catalog_query),
):
    try:
        products = await catalog.search(query)
        return ProductsListResponse(products=products, count=len(products))
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to search products: {str(e)}")
        raise StorageError("Error searching products", detail=str(e))


@router.get("/SimilarProducts", response_model=ProductsListResponse)
async def similar_products(
    category: Optional[str] = Query(None, description="Category name, case-insensitive"),
    catalog: CatalogQuery = Depends(get_catalog_query),
):
    """Products sharing a category"""
    try:
        products = await catalog.by_category(category)
        return ProductsListResponse(
            message=f"Found {len(products)} products in category: {category}",
            category=category,
            products=products,
            count=len(products),
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch products by category: {str(e)}")
        raise StorageError("Error fetching products by category", detail=str(e))


@router.get("/ValidOptions", response_model=ValidOptionsResponse)
async def get_valid_options():
    categories, sizes = valid_options()
    return ValidOptionsResponse(valid_categories=categories, valid_sizes=sizes)


# Product lifecycle

@router.post("/CreateProduct", status_code=201, response_model=ProductResponse)
async def create_product(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    size_variants: Optional[str] = Form(None, alias="sizeVariants", description="JSON encoded list"),
    images: Optional[List[UploadFile]] = File(None),
    products: ProductService = Depends(get_product_service),
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
):
    """Create a product from form fields and up to seven image files"""
    try:
        stored = await store_uploads(images, blob_store, settings.max_upload_files, settings.max_upload_size_mb)
        request = CreateProductRequest(
            title=title, description=description, category=category, size_variants=size_variants
        )
        product = await products.create_product(request, stored)
        return ProductResponse(message="Product created successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {str(e)}")
        raise StorageError("Error creating product", detail=str(e))


async def _read_update_payload(http_request: Request) -> Dict[str, Any]:
    """Form fields or JSON object of an update request; uploaded files are ignored."""
    content_type = http_request.headers.get("content-type", "")
    if content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded")):
        form = await http_request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}
    try:
        payload = await http_request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        raise ValidationError("Validation error", detail="Request body must be form data or a JSON object")
    return payload


@router.post("/UpdateProduct", response_model=ProductResponse)
async def update_product(
    http_request: Request,
    products: ProductService = Depends(get_product_service),
):
    """Update title, description, category or size variants of a product"""
    product_id = None
    try:
        payload = await _read_update_payload(http_request)
        product_id = payload.get("id")
        request = validate_document(UpdateProductRequest, payload)
        product = await products.update_product(request)
        return ProductResponse(message="Product updated successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to update product {product_id}: {str(e)}")
        raise StorageError("Error updating product", detail=str(e))


@router.get("/DeleteProduct", response_model=SuccessResponse)
async def delete_product(
    id: Optional[str] = Query(None, description="Product ID"),
    products: ProductService = Depends(get_product_service),
):
    """Delete a product and its image files"""
    try:
        await products.delete_product(id)
        return SuccessResponse(message="Product deleted successfully")
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {id}: {str(e)}")
        raise StorageError("Error deleting product", detail=str(e))


# Size variants

@router.post("/AddSizeVariant", response_model=ProductResponse)
async def add_size_variant(
    request: AddSizeVariantRequest,
    ledger: VariantLedger = Depends(get_variant_ledger),
):
    try:
        product = await ledger.add_variant(
            request.product_id,
            request.size,
            request.price,
            stock=request.stock,
            is_available=request.is_available,
        )
        return ProductResponse(message="Size variant added successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to add size variant: {str(e)}")
        raise StorageError("Error adding size variant", detail=str(e))


@router.post("/UpdateSizeVariant", response_model=ProductResponse)
async def update_size_variants(
    request: ReplaceSizeVariantsRequest,
    ledger: VariantLedger = Depends(get_variant_ledger),
):
    """Replace every size variant of a product"""
    try:
        product = await ledger.replace_all_variants(request.product_id, request.size_variants)
        return ProductResponse(message="Size variants updated successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to update size variants: {str(e)}")
        raise StorageError("Error updating size variants", detail=str(e))


@router.post("/EditSizeVariant", response_model=ProductResponse)
async def edit_size_variant(
    request: EditSizeVariantRequest,
    ledger: VariantLedger = Depends(get_variant_ledger),
):
    """Change size, price or availability of one variant"""
    try:
        product = await ledger.update_variant(request.product_id, request.variant_id, request)
        return ProductResponse(message="Size variant updated successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to edit size variant {request.variant_id}: {str(e)}")
        raise StorageError("Error updating size variant", detail=str(e))


@router.post("/DeleteSizeVariant", response_model=ProductResponse)
async def delete_size_variant(
    request: DeleteSizeVariantRequest,
    ledger: VariantLedger = Depends(get_variant_ledger),
):
    try:
        product = await ledger.remove_variant(request.product_id, request.variant_id)
        return ProductResponse(message="Size variant deleted successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete size variant {request.variant_id}: {str(e)}")
        raise StorageError("Error deleting size variant", detail=str(e))


# Images

@router.post("/AddImageToProduct", response_model=ImageMutationResponse)
async def add_image_to_product(
    product_id: str = Form(..., alias="productId"),
    images: Optional[List[UploadFile]] = File(None),
    gallery: ImageGallery = Depends(get_image_gallery),
    settings: Settings = Depends(get_settings),
):
    """Attach uploaded images to a product"""
    try:
        stored = await store_uploads(
            images, gallery.blob_store, settings.max_upload_files, settings.max_upload_size_mb
        )
        product, added = await gallery.add_images(product_id, stored)
        return ImageMutationResponse(
            message=f"{len(added)} image(s) added successfully",
            product=product,
            added_images=added,
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to add images to product {product_id}: {str(e)}")
        raise StorageError("Error adding images", detail=str(e))


@router.post("/DeleteImageFromProduct", response_model=ImageMutationResponse)
async def delete_image_from_product(
    request: ProductImageRequest,
    gallery: ImageGallery = Depends(get_image_gallery),
):
    try:
        product, image = await gallery.remove_image(request.product_id, request.image_id)
        return ImageMutationResponse(
            message="Image deleted successfully", product=product, deleted_image=image
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete image {request.image_id}: {str(e)}")
        raise StorageError("Error deleting image", detail=str(e))


@router.post("/UpdateImageInProduct", response_model=ImageMutationResponse)
async def update_image_in_product(
    product_id: str = Form(..., alias="productId"),
    image_id: str = Form(..., alias="imageId"),
    image: Optional[UploadFile] = File(None),
    gallery: ImageGallery = Depends(get_image_gallery),
    settings: Settings = Depends(get_settings),
):
    """Swap the file behind an existing image entry"""
    try:
        if image is None or not image.filename:
            raise ValidationError("Image file is required")

        [stored] = await store_uploads([image], gallery.blob_store, 1, settings.max_upload_size_mb)
        product, updated = await gallery.replace_image(product_id, image_id, stored)
        return ImageMutationResponse(
            message="Image updated successfully", product=product, updated_image=updated
        )
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to update image {image_id}: {str(e)}")
        raise StorageError("Error updating image", detail=str(e))


@router.post("/SetCoverImage", response_model=ProductResponse)
async def set_cover_image(
    request: ProductImageRequest,
    gallery: ImageGallery = Depends(get_image_gallery),
):
    try:
        product = await gallery.set_cover(request.product_id, request.image_id)
        return ProductResponse(message="Cover image updated successfully", product=product)
    except StorefrontError:
        raise
    except Exception as e:
        logger.error(f"Failed to set cover image {request.image_id}: {str(e)}")
        raise StorageError("Error setting cover image", detail=str(e))
