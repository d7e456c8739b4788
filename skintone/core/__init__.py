"""Core skin tone and season analysis functionality"""
from .color_space import rgb_to_lab, rgb_to_hex, chroma
from .sampling import extract_patches, select_representative
from .classifiers import classify_undertone, classify_depth, classify_clarity
from .season import SEASON_TABLE, infer_season, overall_confidence
from .errors import (
    AnalysisError,
    MissingInput,
    InvalidRegion,
    NoSamples,
    ImageFetchFailed,
    ImageDecodeFailed
)
from .pipeline import (
    heuristic_face_box,
    resolve_face_box,
    quality_issues,
    analyze_image,
    analyze_cropped_face,
    analyze
)

__all__ = [
    'rgb_to_lab',
    'rgb_to_hex',
    'chroma',
    'extract_patches',
    'select_representative',
    'classify_undertone',
    'classify_depth',
    'classify_clarity',
    'SEASON_TABLE',
    'infer_season',
    'overall_confidence',
    'AnalysisError',
    'MissingInput',
    'InvalidRegion',
    'NoSamples',
    'ImageFetchFailed',
    'ImageDecodeFailed',
    'heuristic_face_box',
    'resolve_face_box',
    'quality_issues',
    'analyze_image',
    'analyze_cropped_face',
    'analyze'
]
