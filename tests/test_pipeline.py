"""
Tests for the analysis pipeline orchestration.
"""
import pytest

from conftest import encode_base64, encode_png, solid_image
from skintone.core import pipeline
from skintone.core.errors import (
    ImageDecodeFailed,
    ImageFetchFailed,
    InvalidRegion,
    MissingInput,
    NoSamples,
)
from skintone.core.pipeline import (
    analyze,
    analyze_image,
    heuristic_face_box,
    quality_issues,
    resolve_face_box,
)
from skintone.models.types import (
    Clarity,
    ColorSample,
    Depth,
    FaceBox,
    FaceBoxMethod,
    LabColor,
    Season,
    SeasonResult,
    Undertone,
)
from skintone.utils.image import ImageFetchError


class TestFaceBoxResolution:
    """Test face box fallback and clamping"""

    def test_heuristic_box_for_square_image(self):
        assert heuristic_face_box(1000, 1000) == FaceBox(x=275, y=150, width=450, height=500)

    def test_missing_box_uses_heuristic(self):
        box, method = resolve_face_box(None, 1000, 1000)
        assert method is FaceBoxMethod.HEURISTIC
        assert box == FaceBox(275, 150, 450, 500)

    def test_negative_field_uses_heuristic(self):
        box, method = resolve_face_box(FaceBox(-1, 10, 100, 100), 1000, 1000)
        assert method is FaceBoxMethod.HEURISTIC
        assert box == FaceBox(275, 150, 450, 500)

    def test_provided_box_is_clamped(self):
        box, method = resolve_face_box(FaceBox(300, 350, 200, 200), 400, 400)
        assert method is FaceBoxMethod.PROVIDED
        assert box == FaceBox(300, 350, 100, 50)

    def test_box_outside_image_is_invalid(self):
        with pytest.raises(InvalidRegion):
            resolve_face_box(FaceBox(500, 0, 100, 100), 400, 400)

    def test_zero_area_box_is_invalid(self):
        with pytest.raises(InvalidRegion):
            resolve_face_box(FaceBox(10, 10, 0, 50), 400, 400)

    def test_image_without_area_is_invalid(self):
        with pytest.raises(InvalidRegion):
            resolve_face_box(None, 0, 400)


class TestAnalyzeImage:
    """Test end-to-end analysis of decoded images"""

    def test_light_warm_tone_is_spring(self, light_warm_image):
        result = analyze_image(light_warm_image)

        assert result.rgb == ColorSample(230, 190, 160)
        assert result.hex == "#e6bea0"
        assert result.lab.l > 70
        assert result.undertone.label is Undertone.WARM
        assert result.depth.label is Depth.LIGHT
        assert result.clarity.label is Clarity.VIVID
        assert result.season.season is Season.SPRING
        assert result.season.confidence == 0.80
        assert result.confidence == pytest.approx(
            (result.undertone.confidence + result.depth.confidence + 0.80) / 3
        )
        assert result.method is FaceBoxMethod.HEURISTIC
        assert result.sample_count == 3

    def test_reference_warm_tone_sits_just_below_light(self):
        """RGB (210, 160, 120) is warm but L is about 69.6, so depth is medium"""
        result = analyze_image(solid_image((210, 160, 120)))

        assert result.undertone.label is Undertone.WARM
        assert result.lab.l == pytest.approx(69.6, abs=0.1)
        assert result.depth.label is Depth.MEDIUM
        assert result.clarity.label is Clarity.VIVID
        assert result.season.season is Season.AUTUMN
        assert result.season.confidence == 0.65

    def test_cool_deep_tone_is_winter(self):
        result = analyze_image(solid_image((60, 60, 110)))
        assert result.undertone.label is Undertone.COOL
        assert result.depth.label is Depth.DEEP
        assert result.season.season is Season.WINTER

    def test_gray_is_neutral(self):
        result = analyze_image(solid_image((128, 128, 128)))
        assert result.undertone.label is Undertone.NEUTRAL
        assert result.clarity.label is Clarity.MUTED
        assert result.season == SeasonResult(Season.AUTUMN, 0.55)

    def test_median_patch_wins(self):
        """The brightness median of the three patches is the skin color"""
        image = solid_image((128, 128, 128), 200, 200)
        image[110:160, 10:60] = (40, 40, 40)
        image[110:160, 140:190] = (110, 150, 200)
        image[20:70, 60:110] = (250, 250, 250)

        result = analyze_image(image, FaceBox(0, 0, 200, 200))
        assert result.rgb == ColorSample(200, 150, 110)
        assert result.method is FaceBoxMethod.PROVIDED

    def test_tiny_face_box_has_no_samples(self):
        with pytest.raises(NoSamples):
            analyze_image(solid_image((200, 150, 120), 100, 100), FaceBox(0, 0, 5, 5))

    def test_deterministic(self, noisy_image):
        png = encode_png(noisy_image)
        first = analyze(image_bytes=png, face_box=FaceBox(40, 40, 240, 240))
        second = analyze(image_bytes=png, face_box=FaceBox(40, 40, 240, 240))
        assert first == second
        assert first.to_response() == second.to_response()


class TestAcquireImage:
    """Test image source handling"""

    def test_missing_input(self):
        with pytest.raises(MissingInput):
            analyze()

    def test_empty_sources_count_as_missing(self):
        with pytest.raises(MissingInput):
            analyze(image_bytes=b"", image_base64="", image_url="")

    def test_base64_source(self, light_warm_image):
        result = analyze(image_base64=encode_base64(light_warm_image))
        assert result.season.season is Season.SPRING

    def test_bytes_take_precedence(self, light_warm_image):
        gray = encode_base64(solid_image((128, 128, 128)))
        result = analyze(image_bytes=encode_png(light_warm_image), image_base64=gray)
        assert result.rgb == ColorSample(230, 190, 160)

    def test_undecodable_bytes(self):
        with pytest.raises(ImageDecodeFailed):
            analyze(image_bytes=b"definitely not an image")

    def test_url_source(self, monkeypatch, light_warm_image):
        png = encode_png(light_warm_image)
        monkeypatch.setattr(pipeline, 'fetch_image_bytes', lambda url: png)
        result = analyze(image_url="https://example.com/face.png")
        assert result.season.season is Season.SPRING

    def test_url_fetch_failure(self, monkeypatch):
        def failing_fetch(url):
            raise ImageFetchError("Failed to fetch image: 404")

        monkeypatch.setattr(pipeline, 'fetch_image_bytes', failing_fetch)
        with pytest.raises(ImageFetchFailed):
            analyze(image_url="https://example.com/missing.png")

    def test_cropped_face_is_whole_image(self):
        crop = encode_base64(solid_image((230, 190, 160), 200, 200))
        result = analyze(cropped_face_base64=crop)
        assert result.method is FaceBoxMethod.PROVIDED
        assert result.face_box == FaceBox(0, 0, 200, 200)
        assert result.sample_count == 3
        assert result.season.season is Season.SPRING

    def test_cropped_face_takes_precedence(self, light_warm_image):
        """Other sources and the face box are ignored when a crop is given"""
        crop = encode_base64(solid_image((128, 128, 128), 120, 120))
        result = analyze(
            image_bytes=encode_png(light_warm_image),
            face_box=FaceBox(10, 10, 50, 50),
            cropped_face_base64=crop,
        )
        assert result.rgb == ColorSample(128, 128, 128)
        assert result.face_box == FaceBox(0, 0, 120, 120)

    def test_undecodable_cropped_face(self):
        with pytest.raises(ImageDecodeFailed):
            analyze(cropped_face_base64="bm90IGFuIGltYWdl")


class TestQualityIssues:
    """Test when a result is flagged for user confirmation"""

    def test_clean_result_needs_no_confirmation(self, light_warm_image):
        result = analyze_image(light_warm_image)
        assert result.quality_issues == ()
        assert not result.needs_confirmation
        assert result.to_response()["needsConfirmation"] is False
        assert result.to_response()["qualityIssues"] == []

    def test_gray_image_is_flagged(self):
        result = analyze_image(solid_image((128, 128, 128)))
        assert result.needs_confirmation
        assert result.quality_issues == ("Image too gray or washed out",)

    def test_missing_patches_are_flagged(self, light_warm_image):
        """A wide, short box only fits the forehead patch"""
        result = analyze_image(light_warm_image, FaceBox(0, 0, 200, 60))
        assert result.sample_count == 1
        assert result.quality_issues == ("Not enough stable samples",)

    def test_both_issues(self):
        assert quality_issues(2, LabColor(50.0, 1.0, 1.0)) == [
            "Not enough stable samples",
            "Image too gray or washed out",
        ]

    def test_chroma_threshold(self):
        assert quality_issues(3, LabColor(50.0, 0.0, 4.0)) == []
        assert quality_issues(3, LabColor(50.0, 0.0, 3.9)) == ["Image too gray or washed out"]


class TestFallbackPayload:
    """Test the safe default payload carried by errors"""

    def test_fallback_shape(self):
        payload = ImageDecodeFailed("bad data").fallback_payload()
        assert payload == {
            'error': 'bad data',
            'undertone': 'neutral',
            'depth': 'medium',
            'clarity': 'muted',
            'season': 'autumn',
            'seasonConfidence': 0.0,
            'needsConfirmation': True,
            'confidence': 0.0,
        }

    def test_client_errors(self):
        assert MissingInput().client_error
        assert InvalidRegion().client_error
        assert NoSamples().client_error
        assert not ImageFetchFailed().client_error
        assert not ImageDecodeFailed().client_error
