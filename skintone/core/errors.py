"""Analysis error taxonomy.

Every error carries a stable ``code`` and whether it is the caller's fault.
Client errors map to HTTP 400; the rest are server errors answered with the
safe default payload from :meth:`AnalysisError.fallback_payload`.
"""

from ..models.types import Clarity, Depth, FallbackResponse, Season, Undertone


class AnalysisError(Exception):
    """Base exception for skin tone analysis errors."""

    code = 'ANALYSIS_FAILED'
    client_error = False

    def fallback_payload(self) -> FallbackResponse:
        """Neutral/medium/autumn result with zero confidence, always flagged for confirmation."""
        return {
            'error': str(self) or self.code,
            'undertone': Undertone.NEUTRAL.value,
            'depth': Depth.MEDIUM.value,
            'clarity': Clarity.MUTED.value,
            'season': Season.AUTUMN.value,
            'seasonConfidence': 0.0,
            'needsConfirmation': True,
            'confidence': 0.0,
        }


class MissingInput(AnalysisError):
    """Exception raised when no image data was supplied."""

    code = 'MISSING_INPUT'
    client_error = True


class InvalidRegion(AnalysisError):
    """Exception raised when no usable face region can be resolved."""

    code = 'INVALID_REGION'
    client_error = True


class NoSamples(AnalysisError):
    """Exception raised when every skin patch overflows the face region."""

    code = 'NO_SAMPLES'
    client_error = True


class ImageFetchFailed(AnalysisError):
    """Exception raised when a remote image cannot be downloaded."""

    code = 'IMAGE_FETCH_FAILED'


class ImageDecodeFailed(AnalysisError):
    """Exception raised when image bytes cannot be decoded."""

    code = 'IMAGE_DECODE_FAILED'
