"""Upload API routes — component images."""

from fastapi import APIRouter, Depends, File, UploadFile

from stockroom.application.services.image_service import read_upload, save_component_image
from stockroom.config import Settings, get_settings
from stockroom.domain.schemas.upload import ImageUploadRead
from stockroom.interfaces.api.deps import get_tenant_id

router = APIRouter(prefix="/api/upload", tags=["Uploads"])


@router.post("/component-image", response_model=ImageUploadRead)
async def upload_component_image(
    image: UploadFile = File(...),
    tenant_id: str = Depends(get_tenant_id),
    settings: Settings = Depends(get_settings),
):
    content = await read_upload(image, settings)
    result = save_component_image(
        content=content,
        filename=image.filename,
        content_type=image.content_type,
        tenant_id=tenant_id,
        settings=settings,
    )
    return ImageUploadRead(**result)
