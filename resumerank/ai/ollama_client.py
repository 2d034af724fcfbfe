# resumerank/ai/ollama_client.py
import json
import logging
from typing import Optional, Dict, List, Any

import requests
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log
)

from resumerank.ats.models import (
    ExternalRecommendation, RecommendationType, RecommendationCategory, Impact
)
from resumerank.ai.job_context import extract_job_role, extract_job_requirements, extract_industry

logger = logging.getLogger(__name__)


class OllamaClient:
    """
    Client for Ollama API that produces extra resume recommendations
    """

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "llama3.2:3b",
        timeout: int = 60,
        max_retries: int = 3
    ):
        """
        Initialize Ollama client

        Args:
            base_url: Ollama API endpoint
            model: Model to use (llama3.2:3b, mistral, etc.)
            timeout: Request timeout in seconds
            max_retries: Attempts per request on transport errors
        """
        self.base_url = base_url.rstrip('/')
        self.model = model
        self.timeout = timeout
        self.max_retries = max(1, max_retries)

    def is_available(self) -> bool:
        """Check if Ollama is running"""
        try:
            response = requests.get(
                f"{self.base_url}/api/tags",
                timeout=5
            )
            return response.status_code == 200
        except requests.RequestException as e:
            logger.warning(f"Ollama not available: {e}")
            return False

    def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
        json_mode: bool = False
    ) -> Optional[str]:
        """
        Generate text using Ollama

        Args:
            prompt: User prompt
            system_prompt: System instruction
            temperature: Creativity (0.0-1.0)
            max_tokens: Max response length
            json_mode: Ask the model for a JSON document

        Returns:
            Generated text or None if failed
        """
        if not self.is_available():
            logger.error("Ollama is not available")
            return None

        messages = []
        if system_prompt:
            messages.append({
                "role": "system",
                "content": system_prompt
            })
        messages.append({
            "role": "user",
            "content": prompt
        })

        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens
            }
        }
        if json_mode:
            payload["format"] = "json"

        try:
            result = self._post_chat(payload)
        except requests.Timeout:
            logger.error(f"Ollama request timed out after {self.timeout}s")
            return None
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Ollama generation failed: {e}")
            return None

        return result.get("message", {}).get("content", "").strip()

    def _post_chat(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST to the chat endpoint with exponential backoff retry"""
        retryer = Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(requests.RequestException),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True
        )
        return retryer(self._send, payload)

    def _send(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = requests.post(
            f"{self.base_url}/api/chat",
            json=payload,
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def recommend(
        self,
        resume_text: str,
        job_description: str,
        candidate_name: str,
        current_score: int,
        max_recommendations: int = 10
    ) -> List[ExternalRecommendation]:
        """
        Ask the model for role-specific resume recommendations

        Args:
            resume_text: Plain resume text
            job_description: Target JD or profile summary
            candidate_name: Candidate display name
            current_score: Overall ATS score from rule-based analysis
            max_recommendations: Upper bound on returned items

        Returns:
            Validated recommendations; a single "AI Analysis Unavailable"
            record when the model is unavailable or its output is unusable
        """
        job_role = extract_job_role(job_description)
        requirements = extract_job_requirements(job_description)
        industry = extract_industry(job_description)

        system_prompt = f"""You are an expert resume analyzer and career coach specializing in {industry} roles.

Your expertise includes:
- {job_role} role requirements and expectations
- {industry} industry best practices
- ATS optimization strategies
- Career development in the {industry} field

Give specific, actionable recommendations tailored to the candidate's target
role and industry.

Respond ONLY with JSON of the form:
{{"recommendations": [{{"type": "critical|important|suggestion",
"category": "keywords|formatting|sections|content|ai_enhanced|role_specific",
"title": "...", "description": "...", "impact": "high|medium|low",
"confidence": 0.0-1.0}}]}}"""

        prompt = f"""RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description}

CANDIDATE: {candidate_name}
TARGET ROLE: {job_role}
INDUSTRY: {industry}
CURRENT ATS SCORE: {current_score}/100

JOB REQUIREMENTS IDENTIFIED:
{', '.join(requirements) or 'none found'}

Consider role-specific keywords and terminology, best practices for {industry},
skills and experiences valued in {job_role} positions, and formatting standards
for this industry.

Provide 6-10 recommendations tailored to this role."""

        response = self.generate(
            prompt=prompt,
            system_prompt=system_prompt,
            temperature=0.4,
            max_tokens=2500,
            json_mode=True
        )

        if not response:
            logger.warning(f"No AI response for {candidate_name}, using fallback recommendation")
            return [self.fallback_recommendation()]

        recommendations = self.parse_recommendations(response)
        if not recommendations:
            logger.warning(f"No usable AI recommendations for {candidate_name}, using fallback")
            return [self.fallback_recommendation()]

        logger.info(
            f"Received {len(recommendations)} AI recommendations for {candidate_name} "
            f"({job_role}, {industry})"
        )
        return recommendations[:max_recommendations]

    @staticmethod
    def fallback_recommendation() -> ExternalRecommendation:
        return ExternalRecommendation(
            type=RecommendationType.SUGGESTION,
            category=RecommendationCategory.AI_ENHANCED,
            title="AI Analysis Unavailable",
            description="Unable to generate AI recommendations at this time. Please try again later.",
            impact=Impact.LOW,
            confidence=0.5,
            ai_generated=True
        )

    @staticmethod
    def parse_recommendations(response: str) -> List[ExternalRecommendation]:
        """Parse model output into validated recommendations"""
        try:
            data = json.loads(response)
        except json.JSONDecodeError:
            logger.warning("AI response was not valid JSON")
            return []

        items = data.get("recommendations", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            logger.warning("AI response has no recommendation list")
            return []

        recommendations = []
        for item in items:
            if isinstance(item, dict):
                item = {**item, "aiGenerated": True}
            try:
                recommendations.append(ExternalRecommendation.from_dict(item))
            except ValueError as e:
                logger.warning(f"Skipping malformed AI recommendation: {e}")

        return recommendations
