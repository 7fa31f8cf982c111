from fastapi import APIRouter, Depends

from seller_finance.api.deps import get_data_source
from seller_finance.schemas.system import VendorResponse
from seller_finance.services.data_source import FinanceDataSource

router = APIRouter()


@router.get("/{handle}", response_model=VendorResponse)
def get_vendor(handle: str, source: FinanceDataSource = Depends(get_data_source)):
    """
    Resolves a vendor handle (e.g. "vibe-vintage") to its vendor ID.
    """
    return VendorResponse(id=source.resolve_vendor(handle))
