"""
Products module interface.

The API layer depends on IProductService for all product operations.
"""

from typing import Protocol, Optional, Any, runtime_checkable

from .models import Product, ProductInput, ProductListResponse, ProductStats


@runtime_checkable
class IProductService(Protocol):
    """
    Interface for product operations.

    This protocol defines the contract that the products module exposes
    to the API layer.
    """

    async def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        sort: Optional[str] = None,
    ) -> ProductListResponse:
        """
        List products, filtered, sorted and paginated.

        Args:
            category: Category name; None or "all" disables the filter
            search: Case-insensitive substring of name, description or sku
            page: Page number (1-indexed); coerced, defaults to 1
            limit: Page size; coerced, defaults to 10
            sort: Sort spec such as "-createdAt" or "category,-price"

        Returns:
            The page, total matches and page count. A page past the end
            is empty rather than an error.
        """
        ...

    async def get_product(self, product_id: str) -> Product:
        """
        Get a product by id.

        Raises:
            InvalidProductIdError: If the id is malformed
            ProductNotFoundError: If no product has the id
        """
        ...

    async def create_product(self, data: ProductInput, user_id: str) -> Product:
        """
        Create a product owned by user_id.

        Raises:
            ProductValidationError: If any field is invalid
            DuplicateSkuError: If the SKU (given or generated) is taken
        """
        ...

    async def update_product(self, product_id: str, data: ProductInput) -> Product:
        """
        Overwrite a product with the supplied fields merged in.

        Raises:
            InvalidProductIdError, ProductNotFoundError,
            ProductValidationError, DuplicateSkuError
        """
        ...

    async def delete_product(self, product_id: str) -> None:
        """
        Permanently delete a product.

        Raises:
            InvalidProductIdError, ProductNotFoundError
        """
        ...

    async def get_stats(self) -> ProductStats:
        """Totals, per-category breakdown and low-stock count."""
        ...
