# dashboard/api/resume.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict, List, Literal, Optional
from datetime import datetime
from functools import lru_cache
from pathlib import Path
import logging

from resumerank.config import EngineConfig
from resumerank.ats.analyzer import ATSAnalyzer
from resumerank.ats.models import AnalysisResult
from resumerank.ranking.ranker import Ranker
from resumerank.ranking.insights import InsightAggregator
from resumerank.ai.ollama_client import OllamaClient
from dashboard.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


class AnalysisRequest(BaseModel):
    resumeText: str
    candidateName: str
    candidateRole: str
    jobTemplate: Optional[str] = None
    customJobDescription: Optional[str] = None
    useAI: bool = False


class ATSScorePayload(BaseModel):
    overall: float
    keywordMatch: float
    formatting: float
    sectionCompleteness: float
    readability: float


class KeywordAnalysisPayload(BaseModel):
    matched: List[str]
    missing: List[str]
    density: float
    relevanceScore: float


class SectionAnalysisPayload(BaseModel):
    summary: bool
    skills: bool
    experience: bool
    education: bool
    projects: bool
    certifications: bool
    completenessScore: float


class RecommendationPayload(BaseModel):
    type: Literal["critical", "important", "suggestion"]
    category: Literal["keywords", "formatting", "sections", "content", "ai_enhanced", "role_specific"]
    title: str
    description: str
    impact: Literal["high", "medium", "low"]
    confidence: Optional[float] = None
    aiGenerated: Optional[bool] = None


class AnalysisPayload(BaseModel):
    candidateId: str
    candidateName: str
    candidateRole: str
    atsScore: ATSScorePayload
    keywordAnalysis: KeywordAnalysisPayload
    sectionAnalysis: SectionAnalysisPayload
    recommendations: List[RecommendationPayload]
    analysisDate: Optional[datetime] = None
    version: Optional[int] = None


class RankingRequest(BaseModel):
    analyses: List[AnalysisPayload]
    jobTemplate: Optional[str] = None
    customJobDescription: Optional[str] = None


@lru_cache()
def get_engine_config() -> EngineConfig:
    """Engine config, loaded once per process"""
    if Path(settings.engine_config_path).exists():
        return EngineConfig.from_yaml(settings.engine_config_path)
    return EngineConfig()


def get_analyzer() -> ATSAnalyzer:
    return ATSAnalyzer.from_config(get_engine_config())


def get_ai_client() -> Optional[OllamaClient]:
    if not settings.ai_recommendations_enabled:
        return None
    return OllamaClient(
        base_url=settings.ollama_host,
        model=settings.ollama_model,
        timeout=settings.ollama_timeout
    )


def _to_analysis_result(payload: AnalysisPayload) -> AnalysisResult:
    return AnalysisResult.from_dict(payload.model_dump(exclude_none=True))


@router.post("/analyze")
async def analyze_resume(
    request: AnalysisRequest,
    analyzer: ATSAnalyzer = Depends(get_analyzer),
    ai_client: Optional[OllamaClient] = Depends(get_ai_client)
) -> Dict:
    """Analyze one resume against a job template or custom job description"""
    try:
        analysis = analyzer.analyze(
            request.resumeText,
            request.candidateName,
            request.candidateRole,
            profile_id=request.jobTemplate,
            custom_job_description=request.customJobDescription
        )

        if request.useAI and ai_client is not None:
            profile = analyzer.resolve_profile(request.jobTemplate, request.customJobDescription)
            job_description = request.customJobDescription or (
                f"{profile.title}: {', '.join(profile.keywords)}"
            )
            ai_recommendations = ai_client.recommend(
                request.resumeText,
                job_description,
                request.candidateName,
                analysis.ats_score.overall
            )
            if ai_recommendations:
                analysis.recommendations = analysis.recommendations + ai_recommendations

        return {
            "success": True,
            "analysis": analysis.to_dict(),
        }
    except Exception as e:
        logger.exception(f"Analysis error: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


@router.post("/rank")
async def rank_resumes(
    request: RankingRequest,
    analyzer: ATSAnalyzer = Depends(get_analyzer)
) -> Dict:
    """Rank previously analyzed resumes and summarize the pool"""
    if not request.analyses:
        return JSONResponse(status_code=400, content={"error": "No analyses provided"})

    try:
        results = [_to_analysis_result(payload) for payload in request.analyses]

        ranker = Ranker(analyzer.registry)
        # Alignment bonus only applies to registry profiles
        rank_profile = None if request.customJobDescription else request.jobTemplate
        ranked = ranker.rank(results, rank_profile)
        insights = InsightAggregator().aggregate(ranked)

        return {
            "success": True,
            "rankedAnalyses": [r.to_dict() for r in ranked],
            "insights": insights.to_dict(),
            "totalResumes": len(ranked),
            "rankingDate": datetime.now().isoformat(),
        }
    except Exception as e:
        logger.exception(f"Ranking error: {e}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


@router.get("/profiles")
async def list_profiles(analyzer: ATSAnalyzer = Depends(get_analyzer)) -> List[Dict]:
    """List available job templates"""
    return [analyzer.registry.get(pid).to_dict() for pid in analyzer.registry.ids()]
