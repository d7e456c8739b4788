"""Data models and type definitions"""
from .types import (
    Undertone,
    Depth,
    Clarity,
    Season,
    FaceBoxMethod,
    FaceBox,
    ColorSample,
    LabColor,
    UndertoneResult,
    DepthResult,
    ClarityResult,
    SeasonResult,
    AnalysisResult,
    Box,
    FaceBoxPayload,
    AnalysisResponse,
    SkinToneRequest,
    FallbackResponse,
    ErrorResponse
)

__all__ = [
    'Undertone',
    'Depth',
    'Clarity',
    'Season',
    'FaceBoxMethod',
    'FaceBox',
    'ColorSample',
    'LabColor',
    'UndertoneResult',
    'DepthResult',
    'ClarityResult',
    'SeasonResult',
    'AnalysisResult',
    'Box',
    'FaceBoxPayload',
    'AnalysisResponse',
    'SkinToneRequest',
    'FallbackResponse',
    'ErrorResponse'
]
