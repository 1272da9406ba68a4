"""Análisis de debilidades y estrategias de venta generadas por LLM.

Toda la lógica la pone el modelo; aquí solo se fija el prompt, se exige una
respuesta JSON con esquema estricto y se valida. Cualquier fallo (red,
timeout, JSON inválido, esquema incorrecto) termina en
``UpstreamGenerationError``: nunca se devuelven datos parciales ni de relleno.
"""
import logging
from typing import Any, Dict, Optional, Type, TypeVar

from openai import AzureOpenAI, OpenAIError
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from optimaflow.core.config import settings
from optimaflow.core.errors import UpstreamGenerationError
from optimaflow.schemas.company import CompanyAnalysis, StrategyGeneration

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

SYSTEM_PROMPT_ANALISIS = (
    "You are a sales process expert analyzing automotive and EV companies. "
    "Provide realistic assessments based on industry patterns."
)

SYSTEM_PROMPT_ESTRATEGIA = (
    "You are an expert sales strategist for OptimaFlow, a company that installs proven "
    "sales follow-up systems for automotive dealerships and EV companies in Europe. "
    "Your strategies should be direct, executive-level, and focused on revenue improvement."
)

SCHEMA_ANALISIS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "weaknesses": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "score": {"type": "number"},
                    "description": {"type": "string"},
                },
                "required": ["label", "score", "description"],
                "additionalProperties": False,
            },
        },
        "hypothesis": {"type": "string"},
        "insights": {"type": "array", "items": {"type": "string"}},
        "opportunity_score": {"type": "number"},
    },
    "required": ["weaknesses", "hypothesis", "insights", "opportunity_score"],
    "additionalProperties": False,
}

SCHEMA_ESTRATEGIA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "outreach_message": {"type": "string"},
        "hypothesis": {"type": "string"},
        "discovery_angles": {"type": "array", "items": {"type": "string"}},
        "objections": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "objection": {"type": "string"},
                    "response": {"type": "string"},
                },
                "required": ["objection", "response"],
                "additionalProperties": False,
            },
        },
        "call_hook": {"type": "string"},
    },
    "required": ["outreach_message", "hypothesis", "discovery_angles", "objections", "call_hook"],
    "additionalProperties": False,
}


def parsear_respuesta(contenido: Optional[str], modelo: Type[T]) -> T:
    """Valida el contenido devuelto por el LLM contra ``modelo``."""
    if not isinstance(contenido, str) or not contenido.strip():
        raise UpstreamGenerationError("Formato de respuesta del LLM inválido")
    try:
        return modelo.model_validate_json(contenido)
    except PydanticValidationError as e:
        logger.error("Respuesta del LLM no cumple el esquema %s: %s", modelo.__name__, e)
        raise UpstreamGenerationError(
            f"Respuesta del LLM no cumple el esquema {modelo.__name__}"
        ) from e


class StructuredGenerator:
    """Llama al LLM con un esquema JSON estricto y devuelve el modelo validado."""

    def __init__(self, client=None, deployment: Optional[str] = None, timeout: Optional[float] = None):
        self._client = client
        self.deployment = deployment or settings.azure_openai_deployment
        self.timeout = timeout or settings.llm_timeout_seconds

    @property
    def client(self):
        if self._client is None:
            if not settings.azure_openai_endpoint or not settings.azure_openai_key:
                raise UpstreamGenerationError("Servicio LLM no configurado")
            # Sin reintentos: quien llama decide qué hacer ante un fallo
            self._client = AzureOpenAI(
                azure_endpoint=settings.azure_openai_endpoint,
                api_key=settings.azure_openai_key,
                api_version=settings.openai_api_version,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    def generar(self, system_prompt: str, prompt: str, nombre: str, schema: Dict[str, Any], modelo: Type[T]) -> T:
        try:
            respuesta = self.client.chat.completions.create(
                model=self.deployment,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": nombre, "strict": True, "schema": schema},
                },
                timeout=self.timeout,
            )
        except OpenAIError as e:
            logger.error("Error llamando al LLM (%s): %s", nombre, e)
            raise UpstreamGenerationError(f"Error llamando al LLM: {e}") from e

        if not respuesta.choices:
            raise UpstreamGenerationError("El LLM no devolvió ninguna respuesta")
        return parsear_respuesta(respuesta.choices[0].message.content, modelo)


_generador: Optional[StructuredGenerator] = None


# Dependencia de FastAPI; los tests la sustituyen por un cliente falso
def get_generator() -> StructuredGenerator:
    global _generador
    if _generador is None:
        _generador = StructuredGenerator()
    return _generador


def prompt_analisis(company_name: str, country: str, type: str) -> str:
    return f"""Analyze the sales process weaknesses for this company:
- Company: {company_name}
- Country: {country}
- Type: {type}

Based on typical patterns in the {type} industry in {country}, identify:
1. Lead capture effectiveness (0-10 score, where 10 is excellent)
2. Follow-up system quality (0-10 score)
3. Response speed (0-10 score)
4. Sales process clarity (0-10 score)
5. CRM usage indicators (0-10 score)

For each weakness, provide a brief description of what's likely happening.
Write labels and descriptions in Spanish (e.g. "Captura de Leads").

Return a JSON object with "weaknesses" (label, score, description), a main
"hypothesis" about their sales inefficiency, three "insights" and an overall
"opportunity_score" from 0 to 10."""


def prompt_estrategia(company_name: str, country: str, type: str, analysis: CompanyAnalysis) -> str:
    return f"""Generate a personalized sales strategy for prospecting this company:
- Company: {company_name}
- Country: {country}
- Type: {type}
- Main Weakness: {analysis.hypothesis}
- Opportunity Score: {analysis.opportunity_score:g}/10

Create a strategy that:
1. Includes a short, personalized outreach message (LinkedIn/Email style)
2. Provides a hypothesis about their main sales inefficiency
3. Suggests 2 discovery call angles
4. Lists likely objections and professional responses
5. Includes a 15-minute call positioning hook

Remember:
- OptimaFlow installs a proven sales follow-up system (not CRM software)
- Focus on revenue improvement and system clarity
- Do NOT mention automation tools or GoHighLevel
- Keep communication direct and executive-level"""


def analyze_company_weaknesses(
    company_name: str,
    country: str,
    type: str,
    generador: Optional[StructuredGenerator] = None,
) -> CompanyAnalysis:
    generador = generador or get_generator()
    logger.info("Analizando debilidades de %s (%s, %s)", company_name, country, type)
    return generador.generar(
        SYSTEM_PROMPT_ANALISIS,
        prompt_analisis(company_name, country, type),
        "company_analysis",
        SCHEMA_ANALISIS,
        CompanyAnalysis,
    )


def generate_sales_strategy(
    company_name: str,
    country: str,
    type: str,
    analysis: CompanyAnalysis,
    generador: Optional[StructuredGenerator] = None,
) -> StrategyGeneration:
    generador = generador or get_generator()
    logger.info("Generando estrategia para %s", company_name)
    return generador.generar(
        SYSTEM_PROMPT_ESTRATEGIA,
        prompt_estrategia(company_name, country, type, analysis),
        "sales_strategy",
        SCHEMA_ESTRATEGIA,
        StrategyGeneration,
    )
