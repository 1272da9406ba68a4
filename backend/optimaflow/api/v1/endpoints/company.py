from fastapi import APIRouter, Depends

from optimaflow.schemas.company import CompanyAnalysis, CompanyAnalyzeRequest, StrategyGeneration, StrategyRequest
from optimaflow.services.company_analyzer import (
    StructuredGenerator,
    analyze_company_weaknesses,
    generate_sales_strategy,
    get_generator,
)

router = APIRouter(prefix="/company", tags=["company"])

@router.post("/analyze", response_model=CompanyAnalysis)
def analizar_empresa(
    datos: CompanyAnalyzeRequest,
    generador: StructuredGenerator = Depends(get_generator)
):
    return analyze_company_weaknesses(datos.company_name, datos.country, datos.type, generador)

@router.post("/strategy", response_model=StrategyGeneration)
def generar_estrategia(
    datos: StrategyRequest,
    generador: StructuredGenerator = Depends(get_generator)
):
    return generate_sales_strategy(datos.company_name, datos.country, datos.type, datos.analysis, generador)
