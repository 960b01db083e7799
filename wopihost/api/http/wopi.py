import logging
from dataclasses import replace
from typing import Any, Dict, Iterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from wopihost.db.repositories.document_repository import SqlDocumentRepository
from wopihost.domains.documents.contracts import DocumentContext, DocumentRepository
from wopihost.domains.documents.exceptions import (
    ActionUrlsNotConfiguredError, DocumentNotFoundError, UnsupportedActionError
)
from wopihost.domains.documents.schemas import ActionUrlResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wopi", tags=["wopi"])


def get_document_context(request: Request) -> DocumentContext:
    """Зависимости документа для текущего запроса"""

    def source_url(file_id: str) -> str:
        return str(request.url_for("wopi.checkFileInfo", file_id=file_id))

    # Внутри запроса ссылка на файл строится от адреса, по которому пришел клиент
    return replace(request.app.state.context, source_url=source_url)


def get_document_repository(
    request: Request,
    context: DocumentContext = Depends(get_document_context)
) -> Iterator[DocumentRepository]:
    with request.app.state.session_factory() as session:
        yield SqlDocumentRepository(context, session)


async def get_current_user_id() -> Optional[str]:
    """Пользователь текущего запроса. Хост-приложение переопределяет эту зависимость"""
    return None


def _find_document(repository: DocumentRepository, file_id: str):
    try:
        return repository.find(file_id)
    except DocumentNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found"
        )


@router.get("/files/{file_id}", name="wopi.checkFileInfo")
def check_file_info(
    file_id: str,
    repository: DocumentRepository = Depends(get_document_repository),
    user_id: Optional[str] = Depends(get_current_user_id)
) -> Dict[str, Any]:
    """CheckFileInfo: метаданные файла для WOPI-клиента"""
    document = _find_document(repository, file_id)
    document.get_user_using(lambda: user_id)

    return document.get_response_properties()


@router.get("/files/{file_id}/actions/{action}", response_model=ActionUrlResponse)
def get_action_url(
    file_id: str,
    action: str,
    repository: DocumentRepository = Depends(get_document_repository)
):
    """Ссылка для открытия документа в WOPI-клиенте"""
    document = _find_document(repository, file_id)

    try:
        url = document.get_url_for_action(action)
    except UnsupportedActionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except ActionUrlsNotConfiguredError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(e)
        )

    logger.info(f"Resolved {action} url for document {file_id}")
    return ActionUrlResponse(action=action, url=url)
