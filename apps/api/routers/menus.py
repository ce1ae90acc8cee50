"""Read-only menu catalog endpoints."""

from fastapi import APIRouter, Depends

from apps.api.deps import get_catalog
from domain.models import MenuItemsResponse, MenusResponse
from services.menu_catalog import CatalogReader


router = APIRouter(prefix="/menus", tags=["menus"])


@router.get("", response_model=MenusResponse, response_model_exclude_none=True)
def list_menus(catalog: CatalogReader = Depends(get_catalog)):
    """List the menus available for group bookings."""
    return MenusResponse(data=catalog.list_menus())


@router.get("/{menu_id}/items", response_model=MenuItemsResponse, response_model_exclude_none=True)
def list_menu_items(menu_id: str, catalog: CatalogReader = Depends(get_catalog)):
    """
    List the items of one menu.

    Unknown menus return an empty list rather than an error.
    """
    return MenuItemsResponse(data=catalog.list_items(menu_id))
