"""Reference data endpoints: phase model and language catalog."""
from typing import Optional

from fastapi import APIRouter, Query

from translationflow.languages import search_languages
from translationflow.schemas.workflow import (
    LanguageInfo,
    LanguageListResponse,
    PhaseInfo,
    StatusInfo,
    WorkflowResponse,
)
from translationflow.workflow import (
    PHASE_DESCRIPTIONS,
    PHASE_LABELS,
    PHASE_SEQUENCE,
    STATUS_LABELS,
    next_phase,
)

router = APIRouter()


@router.get("/workflow/phases", response_model=WorkflowResponse)
async def get_workflow():
    """The canonical phase sequence with labels and descriptions."""
    return WorkflowResponse(
        phases=[
            PhaseInfo(
                phase=phase,
                number=index + 1,
                label=PHASE_LABELS[phase],
                description=PHASE_DESCRIPTIONS[phase],
                next_phase=next_phase(phase),
            )
            for index, phase in enumerate(PHASE_SEQUENCE)
        ],
        statuses=[
            StatusInfo(status=status, label=label)
            for status, label in STATUS_LABELS.items()
        ],
    )


@router.get("/languages", response_model=LanguageListResponse)
async def list_languages(q: Optional[str] = Query(None, max_length=100)):
    """Supported languages, optionally filtered by name or code."""
    return LanguageListResponse(
        languages=[
            LanguageInfo(code=lang.code, name=lang.name, is_common=lang.is_common)
            for lang in search_languages(q or "")
        ]
    )
