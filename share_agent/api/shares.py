import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from share_agent.core.exceptions import (
    CommandExecutionError,
    InvalidMountOptionError,
    OperationNotAllowedError,
    ShareAlreadyExistsError,
    ShareError,
    ShareNameGenerationError,
    UnsupportedPlatformError,
)
from share_agent.dependencies import get_external_mount_manager, get_share_manager
from share_agent.models import (
    AddShareRequest,
    AddShareResponse,
    ExternalMountRequest,
    ExternalMountResponse,
    RemoveShareResponse,
    ShareRecord,
)
from share_agent.services.network_mount import ExternalMountManager
from share_agent.services.sharing import ShareManager

router = APIRouter(prefix="/api/shares", tags=["shares"])


def _policy_status(error: ShareError) -> int:
    if isinstance(error, OperationNotAllowedError):
        return 403
    if isinstance(error, (ShareAlreadyExistsError, ShareNameGenerationError)):
        return 409
    return 500


@router.get("", response_model=List[ShareRecord])
async def list_shares(manager: ShareManager = Depends(get_share_manager)) -> List[ShareRecord]:
    return await manager.list_shares()


@router.post("", response_model=AddShareResponse)
async def add_share(
    request: AddShareRequest, manager: ShareManager = Depends(get_share_manager)
) -> AddShareResponse:
    try:
        path = await manager.add_share(request.path)
        return AddShareResponse(path=path)
    except ShareError as e:
        logging.warning(f"API: Could not add share for {request.path}: {e}")
        raise HTTPException(status_code=_policy_status(e), detail=str(e))
    except Exception as e:
        logging.error(f"API: Unexpected error adding share for {request.path}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("", response_model=RemoveShareResponse)
async def remove_share(
    path: str, manager: ShareManager = Depends(get_share_manager)
) -> RemoveShareResponse:
    try:
        deleted = await manager.remove_share(path)
        return RemoveShareResponse(deleted=deleted)
    except Exception as e:
        logging.error(f"API: Unexpected error removing share for {path}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/external-mounts", response_model=ExternalMountResponse)
async def mount_external_share(
    request: ExternalMountRequest,
    mount_manager: ExternalMountManager = Depends(get_external_mount_manager),
) -> ExternalMountResponse:
    try:
        mount_path = await mount_manager.mount_external_share(
            request.remote_path, request.mount_path, request.username, request.password
        )
        return ExternalMountResponse(mount_path=mount_path, platform=mount_manager.platform_name)
    except InvalidMountOptionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except UnsupportedPlatformError as e:
        raise HTTPException(status_code=501, detail=str(e))
    except (CommandExecutionError, OSError) as e:
        logging.error(f"API: Failed to mount {request.remote_path} at {request.mount_path}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
