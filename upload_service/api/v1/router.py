from fastapi import APIRouter

from upload_service.api.v1.uploads import router as uploads_router

router = APIRouter()
router.include_router(uploads_router)
