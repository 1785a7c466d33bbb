"""Link conversion endpoint."""

from fastapi import APIRouter, Query, status

from tunebridge.api.dependencies import ConverterDep
from tunebridge.models.results import ConversionResults

router = APIRouter(tags=["convert"])


@router.get("/convert", status_code=status.HTTP_200_OK)
async def convert(
    converter: ConverterDep,
    link: str = Query(..., min_length=1, description="Share link to convert"),
) -> ConversionResults:
    """Convert a share link into the links of every configured provider."""
    return await converter.convert(link)
