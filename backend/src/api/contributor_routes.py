# Contributor ranking API routes
# Ranks authors from a git log export posted by the client

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field
from typing import List, Optional
import logging

from ..cli.services.contribution_analysis_service import ContributionAnalysisService
from ..scanner.errors import FormatError, ValidationError


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/contributors", tags=["Contributors"])


class RankRequest(BaseModel):
    """Request model for ranking contributors from raw log text."""
    log_text: str = Field(..., description="Output of git log --pretty=format:'%ae %at' --numstat --no-merges")
    top_n: int = Field(10, gt=0, description="Number of top authors to return")


class RankedContributorModel(BaseModel):
    rank: int
    identity: str
    commit_count: int
    scaled_commit_count: int
    lines_added: int
    lines_deleted: int
    score: str


class RankResponse(BaseModel):
    """Response model for a contributor ranking."""
    total_authors: int
    message: Optional[str] = None
    contributors: List[RankedContributorModel]


def get_service() -> ContributionAnalysisService:
    return ContributionAnalysisService()


@router.post("/rank", response_model=RankResponse)
def rank_contributors(request: RankRequest) -> RankResponse:
    """
    Rank the authors found in ``log_text``.

    An empty log yields an empty list with a "no contributors found"
    message. A malformed line rejects the whole request.
    """
    service = get_service()
    try:
        result = service.rank_log_text(request.log_text, request.top_n)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except FormatError as exc:
        logger.warning(f"Rejected malformed git log: {exc}")
        raise HTTPException(
            status_code=422,
            detail={
                "code": exc.code,
                "message": str(exc),
                "line": exc.line,
                "line_number": exc.line_number,
            },
        )

    return RankResponse(**service.export_data(result))
