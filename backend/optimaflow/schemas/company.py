from pydantic import BaseModel, Field
from typing import List

class Weakness(BaseModel):
    label: str
    score: float  # 0-10, 10 es excelente
    description: str

class CompanyAnalysis(BaseModel):
    weaknesses: List[Weakness]
    hypothesis: str
    insights: List[str]
    opportunity_score: float

class Objection(BaseModel):
    objection: str
    response: str

class StrategyGeneration(BaseModel):
    outreach_message: str
    hypothesis: str
    discovery_angles: List[str]
    objections: List[Objection]
    call_hook: str

class CompanyAnalyzeRequest(BaseModel):
    company_name: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)

class StrategyRequest(CompanyAnalyzeRequest):
    analysis: CompanyAnalysis
