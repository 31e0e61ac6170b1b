"""Catalog Route — the parsed candidate records, so clients evaluate guesses locally."""

from fastapi import APIRouter, Depends

from dailypath.infrastructure.catalog_provider import FileCatalogSource, get_catalog_source
from dailypath.schemas.daily import CatalogResponse

router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("", response_model=CatalogResponse)
async def get_catalog(catalog: FileCatalogSource = Depends(get_catalog_source)):
    return CatalogResponse.from_records(await catalog.load())
