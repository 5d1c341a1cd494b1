from fastapi import APIRouter, Depends, HTTPException, File, UploadFile
from gridstudio.config import settings
from starlette.concurrency import run_in_threadpool
from starlette.responses import PlainTextResponse
from gridstudio.exceptions import (AnalysisFailedError, IngestionError, OperationBusyError,
                                   ShotGenerationFailedError)
from gridstudio.schemas import PromptResponse, SessionState, ShotType, ShotTypeUpdateRequest
from gridstudio.services import GenerationService, get_generation_service
from gridstudio.session import StoryboardSession, create_session, delete_session, get_session
import logging
from typing import List

router = APIRouter()
logger = logging.getLogger(__name__)


def load_session(session_id: str) -> StoryboardSession:
    session = get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


@router.get("/shot-types", response_model=List[str])
def list_shot_types():
    return [shot_type.value for shot_type in ShotType]


@router.post("/sessions", response_model=SessionState)
def new_session():
    return create_session().to_state()


@router.get("/sessions/{session_id}", response_model=SessionState)
def read_session(session: StoryboardSession = Depends(load_session)):
    return session.to_state()


@router.delete("/sessions/{session_id}", status_code=204)
def discard_session(session_id: str):
    if not delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")


@router.post("/sessions/{session_id}/images", response_model=SessionState)
async def upload_images(
    files: List[UploadFile] = File(...),
    session: StoryboardSession = Depends(load_session)
):
    logger.info(f"Received {len(files)} reference image(s) for session {session.session_id}.")
    batch = []
    for file in files:
        batch.append({
            # One byte past the limit is enough for ingestion to reject the file.
            "file_bytes": await file.read(settings.MAX_IMAGE_BYTES + 1),
            "file_content_type": file.content_type,
            "file_filename": file.filename
        })

    try:
        await run_in_threadpool(session.ingest, batch)
    except IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.to_state()


@router.delete("/sessions/{session_id}/images/{index}", response_model=SessionState)
def remove_image(index: int, session: StoryboardSession = Depends(load_session)):
    session.remove_image(index)
    return session.to_state()


@router.post("/sessions/{session_id}/analyze", response_model=SessionState)
def analyze(
    session: StoryboardSession = Depends(load_session),
    generation_service: GenerationService = Depends(get_generation_service)
):
    try:
        session.analyze(generation_service)
    except OperationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except AnalysisFailedError as e:
        raise HTTPException(status_code=502, detail=e.user_message)
    return session.to_state()


@router.post("/sessions/{session_id}/shots/generate", response_model=SessionState)
def generate_shots(
    session: StoryboardSession = Depends(load_session),
    generation_service: GenerationService = Depends(get_generation_service)
):
    try:
        session.generate_shots(generation_service)
    except OperationBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ShotGenerationFailedError as e:
        raise HTTPException(status_code=502, detail=e.user_message)
    return session.to_state()


@router.put("/sessions/{session_id}/shots/{shot_id}", response_model=SessionState)
def update_shot_type(
    shot_id: int,
    request: ShotTypeUpdateRequest,
    session: StoryboardSession = Depends(load_session)
):
    try:
        session.set_shot_type(shot_id, request.type)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Shot {shot_id} not found")
    return session.to_state()


@router.post("/sessions/{session_id}/language/toggle", response_model=SessionState)
def toggle_language(session: StoryboardSession = Depends(load_session)):
    session.toggle_language()
    return session.to_state()


@router.get("/sessions/{session_id}/prompt", response_model=PromptResponse)
def read_prompt(session: StoryboardSession = Depends(load_session)):
    return PromptResponse(language=session.language, prompt=session.compose())


@router.get("/sessions/{session_id}/prompt.txt", response_class=PlainTextResponse)
def read_prompt_text(session: StoryboardSession = Depends(load_session)):
    return PlainTextResponse(session.compose())
